"""Runner: the async top-level entry point.

Reads the configuration, starts the server, then terminates through the
unwrapped primitive.  Any failure on the way is logged and turned into a
real exit with ``ExitCode.FAILURE``; an installed guard never suppresses it.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import NoReturn

from exit_guard.core.config import ServerConfig, read_config
from exit_guard.guard import ExitGuard, SystemTerminator, install_guard
from exit_guard.model import ExitPolicy
from exit_guard.utils.exit_codes import ExitCode

_logger = logging.getLogger(__name__)


async def read_config_async(path: Path | str) -> ServerConfig:
    """``read_config`` off the event loop thread."""
    return await asyncio.to_thread(read_config, path)


async def run_server(
    config: ServerConfig,
    *,
    guard: ExitGuard | None = None,
    serve: bool = True,
) -> None:
    """Build the app for *config* and, when *serve* is set, serve it until shutdown."""
    from exit_guard.web_api.main import create_app

    app = create_app(config, guard)
    _logger.info("Server is running with config: %s", config.to_dict())
    if not serve:
        return

    import uvicorn

    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=config.host,
            port=config.port,
            log_level=config.log_level.lower(),
        )
    )
    where = f"{config.host}:{config.port}"
    # uvicorn reports a failed bind by calling sys.exit itself.  Forwarded,
    # that is a SystemExit; intercepted, uvicorn carries on and fails later.
    try:
        await server.serve()
    except SystemExit as exc:
        if server.started:
            raise
        raise RuntimeError(
            f"server failed to start on {where} (exit code {exc.code})"
        ) from exc
    except Exception as exc:
        if server.started:
            raise
        raise RuntimeError(f"server failed to start on {where}: {exc}") from exc
    if not server.started:
        raise RuntimeError(f"server failed to start on {where}")


async def main(
    config_path: Path | str,
    *,
    guard: ExitGuard,
    policy: ExitPolicy | str | None = None,
    serve: bool = True,
) -> None:
    """Read *config_path* and run the server with it.

    The config's ``exit_policy`` is applied to *guard* unless *policy*
    overrides it.
    """
    config = await read_config_async(config_path)
    guard.set_policy(policy if policy is not None else config.exit_policy)
    await run_server(config, guard=guard, serve=serve)


def run(
    config_path: Path | str,
    *,
    policy: ExitPolicy | str | None = None,
    serve: bool = True,
    hard: bool = False,
    guard: ExitGuard | None = None,
) -> NoReturn:
    """Run :func:`main` and terminate: code 0 on success, 1 on failure.

    Without an explicit *guard* one is installed over ``sys.exit``; *hard*
    makes its real exits skip interpreter cleanup (``os._exit``).  An
    interrupt (Ctrl-C) after a graceful server shutdown counts as success.
    """
    if guard is None:
        guard = install_guard(policy, terminator=SystemTerminator(hard=hard))

    try:
        asyncio.run(main(config_path, guard=guard, policy=policy, serve=serve))
    except KeyboardInterrupt:
        _logger.info("Server stopped by interrupt")
    except Exception as exc:
        _logger.error("Error starting server: %s", exc)
        guard.real_exit(int(ExitCode.FAILURE))
    guard.real_exit(int(ExitCode.SUCCESS))
