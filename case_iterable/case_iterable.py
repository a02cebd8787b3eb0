import json
import logging
from pathlib import Path

import click

from .pipeline import AtomicWriter, CaseIterableGenerator, CodeMergeError, GenerationError, GeneratorConfig, OutputConfig, OutputMode, PythonAstMerger

logger = logging.getLogger(__name__)


@click.command()
@click.option("--name", "-n", "names", multiple=True, type=str, help="Enumeration to derive (repeatable). Default: every top-level enumeration.")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--output", "-o", default=None, type=click.Path(resolve_path=True), help="Write to this file instead of stdout.")
@click.option("--in-place", "-i", is_flag=True, default=False, help="Splice into the input file.")
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite OUTPUT if it exists.")
@click.option("--format/--no-format", "format_code", default=None, help="Run the configured formatter on the result.")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
def case_iterable(names, config, output, in_place, force, format_code, verbose, path):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if in_place and output is not None:
        raise click.UsageError("--in-place and --output are mutually exclusive")

    if config is not None:
        with open(config) as f:
            config = GeneratorConfig.from_dict(json.load(f))
    else:
        config = GeneratorConfig()

    # CLI flags override the config file
    if in_place:
        config.output.mode = OutputMode.IN_PLACE
    elif force:
        config.output.mode = OutputMode.FORCE
    if format_code is not None:
        config.formatter.enabled = format_code

    with open(path, encoding="utf-8") as f:
        source = f.read()

    generator = CaseIterableGenerator(config)
    try:
        code = generator.derive(source, list(names) or None)
    except (GenerationError, CodeMergeError) as e:
        raise click.ClickException(f"{Path(path).name}: {e}") from e

    try:
        if config.output.mode == OutputMode.IN_PLACE:
            _write(Path(path), code, config.output, overwrite=True)
        elif output is None:
            click.echo(code, nl=False)
        else:
            _write(Path(output), code, config.output, overwrite=config.output.mode == OutputMode.FORCE)
    except (FileExistsError, CodeMergeError) as e:
        raise click.ClickException(str(e)) from e


def _write(path: Path, code: str, output_config: OutputConfig, overwrite: bool) -> None:
    if output_config.atomic_write:
        writer = AtomicWriter()
        if overwrite:
            writer.write(path, code, output_config.validate_before_write)
        else:
            writer.write_if_not_exists(path, code, output_config.validate_before_write)
        return

    if not overwrite and path.exists():
        raise FileExistsError(f"Output file already exists: {path}. Use --force to overwrite or --in-place to splice into the input.")
    if output_config.validate_before_write:
        PythonAstMerger().validate(code)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(code, encoding="utf-8")
    logger.info("Wrote %s", path)
