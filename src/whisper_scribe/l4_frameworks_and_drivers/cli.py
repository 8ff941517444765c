"""CLI entry point for whisper-scribe."""

from __future__ import annotations

import contextlib
import logging
import signal
import sys
import threading
from collections.abc import Callable, Iterator
from pathlib import Path

import click
import numpy as np

from whisper_scribe import __version__
from whisper_scribe.l1_entities.cancel_token import CancelToken
from whisper_scribe.l1_entities.config import AppConfig
from whisper_scribe.l1_entities.errors import NoSpeechDetectedError, SinkFailureError, WhisperScribeError

log = logging.getLogger('wsc.cli')

EXIT_FAILURE = 1
EXIT_NO_SPEECH = 2


@contextlib.contextmanager
def _on_sigint(callback: Callable[[], None]) -> Iterator[None]:
    """Route Ctrl-C to *callback* instead of raising KeyboardInterrupt."""
    previous = signal.signal(signal.SIGINT, lambda *_: callback())
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def _fail(message: str, code: int = EXIT_FAILURE) -> None:
    click.echo(message, err=True)
    sys.exit(code)


def _open_controller(ctx: click.Context, clipboard: bool | None = None):
    """Build the container, load the configured model, and return the container."""
    from whisper_scribe.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: engine stack not loaded on --help
        DependencyContainer,
    )

    config: AppConfig = ctx.obj['config']
    if clipboard is not None:
        config = config.model_copy(update={'clipboard': config.clipboard.model_copy(update={'enabled': clipboard})})

    model = ctx.obj['model'] or config.model.path

    def _on_progress(percent: int) -> None:
        click.echo(f'  Downloading {model}: {percent}%', err=True)

    container = DependencyContainer(config, on_download_progress=_on_progress)
    ctx.call_on_close(container.controller.close)
    try:
        container.controller.load_model(model)
    except WhisperScribeError as e:
        _fail(f'Error: {e}')
    log.info(container.controller.describe_model())
    return container


def _emit(run: Callable[[], str]) -> str:
    try:
        text = run()
    except NoSpeechDetectedError as e:
        _fail(f'{e}.', EXIT_NO_SPEECH)
    except WhisperScribeError as e:
        _fail(f'Error: {e}')
    click.echo(text)
    return text


@click.group()
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Path to YAML config file.',
)
@click.option(
    '-m',
    '--model',
    default=None,
    help="Model file path or whisper.cpp model name (e.g. 'base.en').",
)
@click.option(
    '--log-dir',
    default=None,
    type=click.Path(file_okay=False),
    help='Write a debug log into this directory.',
)
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx: click.Context, config_path, model, log_dir):
    """whisper-scribe -- transcribe audio files, recordings and raw samples with whisper.cpp."""
    from whisper_scribe.l3_interface_adapters.gateways.yaml_config_loader import (  # noqa: PLC0415 -- deferred: yaml stack not loaded on --help
        YamlConfigLoader,
    )
    from whisper_scribe.l4_frameworks_and_drivers.infra_config import (  # noqa: PLC0415 -- deferred: not needed for --help
        build_app_config,
    )

    try:
        raw = YamlConfigLoader().load_raw(config_path)
        config = build_app_config(raw)
    except (FileNotFoundError, ValueError) as e:
        _fail(f'Error: {e}')

    if log_dir:
        from whisper_scribe.l4_frameworks_and_drivers.logging_setup import (  # noqa: PLC0415 -- deferred: only with --log-dir
            setup_file_logging,
        )

        setup_file_logging(Path(log_dir), config.log_level)

    ctx.obj = {'config': config, 'model': model}


@cli.command()
@click.argument('audio_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--copy', is_flag=True, default=False, help='Also copy the transcript to the clipboard.')
@click.pass_context
def transcribe(ctx: click.Context, audio_file, copy):
    """Transcribe AUDIO_FILE (any format ffmpeg can read)."""
    container = _open_controller(ctx)
    cancel = CancelToken()
    with _on_sigint(cancel.cancel):
        text = _emit(lambda: container.controller.transcribe_file(audio_file, cancel))

    if copy:
        from whisper_scribe.l3_interface_adapters.gateways.clipboard_sink import (  # noqa: PLC0415 -- deferred: only with --copy
            ClipboardSink,
        )

        try:
            ClipboardSink(container.config.clipboard.command).publish(text)
        except SinkFailureError as e:
            click.echo(f'Warning: could not copy to clipboard ({e}).', err=True)


@cli.command('transcribe-recording')
@click.argument('source', type=click.File('rb'))
@click.option('--copy/--no-copy', default=True, help='Copy the transcript to the clipboard.')
@click.pass_context
def transcribe_recording(ctx: click.Context, source, copy):
    """Transcribe an opaque recording blob read from SOURCE ('-' for stdin)."""
    blob = source.read()
    container = _open_controller(ctx, clipboard=copy)
    cancel = CancelToken()
    with _on_sigint(cancel.cancel):
        _emit(lambda: container.controller.transcribe_recording(blob, cancel))

    result = container.controller.last_result
    if result is not None and result.publish_error:
        click.echo(f'Warning: could not copy to clipboard ({result.publish_error}).', err=True)


@cli.command('transcribe-samples')
@click.argument('source', type=click.File('rb'))
@click.pass_context
def transcribe_samples(ctx: click.Context, source):
    """Transcribe raw float32 little-endian mono 16 kHz samples from SOURCE ('-' for stdin)."""
    data = source.read()
    if len(data) % 4:
        _fail(f'Error: sample stream of {len(data)} bytes is not a whole number of float32 samples')
    samples = np.frombuffer(data, dtype='<f4')
    container = _open_controller(ctx)
    _emit(lambda: container.controller.transcribe_samples(samples))


@cli.command()
@click.option('-s', '--seconds', type=click.FloatRange(min=0.5), default=None, help='Stop after this many seconds.')
@click.option('--copy/--no-copy', default=True, help='Copy the transcript to the clipboard.')
@click.option(
    '--save',
    'save_path',
    default=None,
    type=click.Path(dir_okay=False),
    help='Also keep the capture as a 16 kHz mono WAV file.',
)
@click.pass_context
def record(ctx: click.Context, seconds, copy, save_path):
    """Record from the default microphone until Ctrl-C (or --seconds), then transcribe."""
    from whisper_scribe.l2_use_cases.capture_use_case import (  # noqa: PLC0415 -- deferred: record only
        CaptureAudioUseCase,
    )
    from whisper_scribe.l3_interface_adapters.gateways.sounddevice_audio_source import (  # noqa: PLC0415 -- deferred: PortAudio not loaded for file paths
        SounddeviceAudioSource,
    )

    container = _open_controller(ctx)
    stop = threading.Event()
    click.echo('Recording... press Ctrl-C to stop.', err=True)
    try:
        with _on_sigint(stop.set):
            audio = CaptureAudioUseCase(SounddeviceAudioSource()).execute(max_seconds=seconds, stop=stop)
    except Exception as e:
        _fail(f'Error: cannot record from microphone ({e})')

    if save_path:
        from whisper_scribe.l3_interface_adapters.gateways.wav_codec import encode_wav  # noqa: PLC0415 -- deferred: record only

        click.echo(f'Saved capture: {encode_wav(audio, Path(save_path))}', err=True)

    text = _emit(lambda: container.controller.transcribe_samples(audio))
    if copy and container.sink is not None:
        try:
            container.sink.publish(text)
        except SinkFailureError as e:
            click.echo(f'Warning: could not copy to clipboard ({e}).', err=True)


@cli.command()
@click.pass_context
def info(ctx: click.Context):
    """Load the configured model and describe it."""
    container = _open_controller(ctx)
    click.echo(container.controller.describe_model())
