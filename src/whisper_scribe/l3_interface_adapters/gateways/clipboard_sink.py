"""Gateway: clipboard sink — implements ResultSink port via a one-shot copy command."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess  # noqa: S404 -- intentional: fixed clipboard command, not shell=True
import sys

from whisper_scribe.l1_entities.errors import SinkFailureError

log = logging.getLogger('wsc.sink')


def default_clipboard_command() -> list[str]:
    """Pick the platform's stdin-driven clipboard tool."""
    if sys.platform == 'darwin':
        return ['pbcopy']
    if sys.platform == 'win32':
        return ['clip']
    if os.environ.get('WAYLAND_DISPLAY') and shutil.which('wl-copy'):
        return ['wl-copy']
    return ['xclip', '-selection', 'clipboard']


class ClipboardSink:
    def __init__(self, command: list[str] | None = None) -> None:
        self._command = list(command) if command else default_clipboard_command()

    def publish(self, text: str) -> None:
        """Pipe *text* into the clipboard command and wait for it to exit.

        Raises:
            SinkFailureError: the command could not start, the write failed,
                              or it exited non-zero.
        """
        try:
            proc = subprocess.Popen(self._command, stdin=subprocess.PIPE)  # noqa: S603
        except OSError as e:
            raise SinkFailureError(f'Failed to launch {self._command[0]}: {e}') from e

        stdin = proc.stdin
        if stdin is None:
            proc.kill()
            proc.wait()
            raise SinkFailureError(f'{self._command[0]} has no stdin pipe')
        try:
            stdin.write(text.encode('utf-8'))
        except OSError as e:
            proc.kill()
            proc.wait()
            raise SinkFailureError(f'Failed to write to {self._command[0]}: {e}') from e
        finally:
            try:
                stdin.close()
            except OSError:
                log.debug('Clipboard stdin already closed')

        returncode = proc.wait()
        if returncode != 0:
            raise SinkFailureError(f'{self._command[0]} exited with code {returncode}')
        log.info('Text copied to clipboard (%d chars)', len(text))
