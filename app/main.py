"""Main module entrypoint for local runtime execution.

This module validates startup configuration and launches the FastAPI service,
or runs one launch, status or watch command.
"""

import argparse
import json

import httpx
import uvicorn

from app.bootstrap import bootstrap_create_application, bootstrap_create_services
from app.config import config_configure_logging, config_load_settings
from app.dashboard import DashboardStatusPoller, JobCard


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
    """

    argument_parser = argparse.ArgumentParser(description="Job dashboard runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "launch", "statuses", "watch"),
        help="Runtime command: `api` starts server, `launch` submits one job, "
        "`statuses` prints the status map, `watch` polls a running dashboard",
        type=str,
    )
    argument_parser.add_argument(
        "key",
        nargs="?",
        type=str,
        help="Job key for `launch`",
    )
    argument_parser.add_argument(
        "--iterations",
        dest="iterations",
        type=int,
        help="Optional number of refreshes for `watch`",
    )
    parsed_arguments = argument_parser.parse_args()

    settings = config_load_settings()
    config_configure_logging(settings.log_level)

    if parsed_arguments.command == "launch":
        if not parsed_arguments.key:
            argument_parser.error("`launch` requires a job key")
        services = bootstrap_create_services(settings=settings)
        launch_result = services.launcher.job_launch(parsed_arguments.key)
        if not launch_result.launch_is_success():
            print(f"error ({launch_result.error_code}): {launch_result.reason}")
            raise SystemExit(1)
        print(f"launched {launch_result.key} runtime_id={launch_result.runtime_id}")
        return

    if parsed_arguments.command == "statuses":
        services = bootstrap_create_services(settings=settings)
        statuses = services.status_service.status_get_all()
        payload = {"statuses": {key: resolved.status_to_payload() for key, resolved in statuses.items()}}
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    if parsed_arguments.command == "watch":
        with httpx.Client(base_url=settings.dashboard_base_url, timeout=settings.dashboard_request_timeout_seconds) as client:
            poller = DashboardStatusPoller(
                client=client,
                interval_seconds=settings.poll_interval_seconds,
                on_render=main_print_card,
            )
            if not poller.poller_load_cards():
                print(f"dashboard unreachable at {settings.dashboard_base_url}")
                raise SystemExit(1)
            try:
                poller.poller_run(max_iterations=parsed_arguments.iterations)
            except KeyboardInterrupt:
                return
        return

    application = bootstrap_create_application(settings=settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


def main_print_card(card: JobCard) -> None:
    """Print one rendered card line for the terminal poller.

    Args:
        card: Card that was just rendered.

    Returns:
        None: Prints to stdout as side effect.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    button_state = "disabled" if card.view.button_disabled else "enabled"
    print(f"{card.key:<32} {card.view.text:<48} [{button_state}]")


if __name__ == "__main__":
    main()
