"""Store layer package for run record persistence and Redis connectivity."""

from .client import store_create_redis_client
from .health import InMemoryStoreHealthService, RedisStoreHealthService
from .interfaces import RunRecordStoreError, RunRecordStorePort, StoreHealthPort
from .memory_run_record import InMemoryRunRecordStore
from .redis_run_record import RedisRunRecordStore

__all__ = [
	"InMemoryRunRecordStore",
	"InMemoryStoreHealthService",
	"RedisRunRecordStore",
	"RedisStoreHealthService",
	"RunRecordStoreError",
	"RunRecordStorePort",
	"StoreHealthPort",
	"store_create_redis_client",
]
