# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""pygls language server publishing checkmate diagnostics on save."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from checkmate import __version__
from checkmate.config.models import ServerOptions
from checkmate.config.resolver import ResolutionResult
from checkmate.core.logging import ROOT_LOGGER_NAME, configure_logging, default_log_file, level_from_flags

from .convert import message_type_for, to_lsp_diagnostics, uri_to_path
from .session import CheckmateSession

LOGGER = logging.getLogger(__name__)

SERVER_NAME = "checkmate"


class ClientLogHandler(logging.Handler):
    """Mirror log records to the editor through ``window/logMessage``.

    Records are only forwarded once :meth:`bind_loop` has been called with the
    server's event loop; records emitted from worker threads are scheduled on
    that loop.
    """

    def __init__(self, server: LanguageServer, level: int = logging.INFO) -> None:
        super().__init__(level)
        self._server = server
        self._loop: asyncio.AbstractEventLoop | None = None

    def bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def emit(self, record: logging.LogRecord) -> None:
        loop = self._loop
        if loop is None:
            return
        try:
            params = types.LogMessageParams(type=message_type_for(record.levelno), message=self.format(record))
            if _running_on(loop):
                self._server.window_log_message(params)
            else:
                loop.call_soon_threadsafe(self._server.window_log_message, params)
        except Exception:  # noqa: BLE001
            self.handleError(record)


def _running_on(loop: asyncio.AbstractEventLoop) -> bool:
    try:
        return asyncio.get_running_loop() is loop
    except RuntimeError:
        return False


class CheckmateServer(LanguageServer):
    """Language server wiring LSP notifications to a :class:`CheckmateSession`."""

    def __init__(self, session: CheckmateSession) -> None:
        super().__init__(SERVER_NAME, __version__)
        self.session = session
        self.client_log_handler = ClientLogHandler(self)

    def workspace_root(self) -> Path:
        """Return the client's workspace root, or the working directory when it sent none."""

        root_path = self.workspace.root_path
        return Path(root_path) if root_path else Path.cwd()

    async def fetch_settings(self) -> object:
        """Request the plugin configuration section from the client.

        Returns:
            object: The raw configuration payload, or an empty mapping when
            the client could not answer.
        """

        params = types.ConfigurationParams(
            items=[types.ConfigurationItem(section=self.session.options.config_section)],
        )
        try:
            return await self.workspace_configuration_async(params)
        except Exception as exc:  # noqa: BLE001
            LOGGER.warning("Could not fetch %s from the client: %s", self.session.options.config_section, exc)
            return {}

    async def initialize_session(self) -> ResolutionResult:
        """Resolve the installed plugin set from the client configuration."""

        raw_settings = await self.fetch_settings()
        LOGGER.debug("Client settings: %r", raw_settings)
        result = await asyncio.to_thread(self.session.initialize, self.workspace_root(), raw_settings)
        LOGGER.info("Installed plugins: %s", ", ".join(sorted(result.installed)) or "none")
        return result

    async def lint_and_publish(self, uri: str) -> list[types.Diagnostic] | None:
        """Dispatch the saved document and publish its merged diagnostics.

        Args:
            uri: URI of the saved document.

        Returns:
            list[types.Diagnostic] | None: The published diagnostics, or ``None``
            when a newer save superseded this pass before it finished.
        """

        generation = self.session.generations.begin(uri)
        result = await asyncio.to_thread(self.session.lint, uri_to_path(uri))
        if not self.session.generations.is_current(uri, generation):
            LOGGER.debug("Dropping stale diagnostics for %s (generation %d)", uri, generation)
            return None
        diagnostics = to_lsp_diagnostics(result.diagnostics)
        self.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics),
        )
        return diagnostics


def create_server(session: CheckmateSession | None = None) -> CheckmateServer:
    """Build a server with its LSP feature handlers registered."""

    server = CheckmateServer(session or CheckmateSession())

    @server.feature(types.INITIALIZED)
    async def initialized(ls: CheckmateServer, params: types.InitializedParams) -> None:
        ls.client_log_handler.bind_loop(asyncio.get_running_loop())
        await ls.initialize_session()

    @server.feature(types.TEXT_DOCUMENT_DID_SAVE)
    async def did_save(ls: CheckmateServer, params: types.DidSaveTextDocumentParams) -> None:
        await ls.lint_and_publish(params.text_document.uri)

    @server.feature(types.TEXT_DOCUMENT_DID_CLOSE)
    def did_close(ls: CheckmateServer, params: types.DidCloseTextDocumentParams) -> None:
        ls.session.generations.forget(params.text_document.uri)

    return server


def start(options: ServerOptions | None = None, *, start_fn: Callable[[CheckmateServer], None] | None = None) -> None:
    """Configure logging and serve LSP over stdio until the client disconnects.

    Args:
        options: Runtime options; read from the environment when omitted.
        start_fn: Replacement for :meth:`LanguageServer.start_io`, used by tests.
    """

    options = options or ServerOptions.from_env()
    log_file = options.log_file or (default_log_file() if options.debug else None)
    configure_logging(level=level_from_flags(debug=options.debug, verbose=True), log_file=log_file)

    server = create_server(CheckmateSession(options=options))
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.addHandler(server.client_log_handler)
    LOGGER.info("Starting %s %s", SERVER_NAME, __version__)
    try:
        if start_fn is not None:
            start_fn(server)
        else:
            server.start_io()
    finally:
        package_logger.removeHandler(server.client_log_handler)


__all__ = ["CheckmateServer", "ClientLogHandler", "SERVER_NAME", "create_server", "start"]
