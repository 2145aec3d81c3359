from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer

from .utils import setup_rich_logging, get_logger
from .options import DataOptions, DataRange
from .io.header import parse_header, parse_range
from .io.reader import CubeReader
from .io.writer import write_header

app = typer.Typer(add_completion=False, help="ENVI hyperspectral cube reader/writer CLI")

logger = get_logger("envicube.cli")


@app.callback()
def main(quiet: bool = typer.Option(False, "--quiet", "-q", help="Reduce log verbosity")) -> None:
    """CLI entrypoint: configure logging."""
    setup_rich_logging()
    if quiet:
        import logging

        get_logger("envicube").setLevel(logging.WARNING)


def _load_options(header: Path) -> DataOptions:
    options, status = parse_header(header)
    if options is None or status.fatal:
        typer.echo(f"FAILED: {status.message}", err=True)
        raise typer.Exit(code=1)
    if not status:
        logger.warning("Header parsed with problems, continuing with defaults: %s", status.message)
    return options


def _build_range(
    options: DataOptions,
    range_file: Optional[Path],
    start_row: Optional[int],
    end_row: Optional[int],
    start_col: Optional[int],
    end_col: Optional[int],
    start_band: Optional[int],
    end_band: Optional[int],
) -> DataRange:
    data_range = DataRange.full(options)
    if range_file is not None:
        data_range, status = parse_range(range_file, base=data_range)
        if not status:
            typer.echo(f"FAILED: {status.message}", err=True)
            raise typer.Exit(code=1)
    overrides = {
        "start_row": start_row,
        "end_row": end_row,
        "start_col": start_col,
        "end_col": end_col,
        "start_band": start_band,
        "end_band": end_band,
    }
    return replace(data_range, **{k: v for k, v in overrides.items() if v is not None})


def _read(options: DataOptions, data_range: DataRange, progress: bool = False) -> CubeReader:
    reader = CubeReader(options, progress=progress)
    status = reader.read_data(data_range)
    if not status:
        typer.echo(f"FAILED: {status.message}", err=True)
        raise typer.Exit(code=1)
    return reader


HEADER_OPTION = typer.Option(..., exists=True, dir_okay=False, resolve_path=True, help="ENVI header or config file")
RANGE_FILE_OPTION = typer.Option(None, exists=True, dir_okay=False, resolve_path=True,
                                 help="Range file with start/end row/col/band keys")


@app.command("version")
def version() -> None:
    from . import __version__

    typer.echo(__version__)


@app.command("info")
def info(header: Path = HEADER_OPTION) -> None:
    """Print the data options parsed from a header."""
    options = _load_options(header)
    typer.echo(f"data: {options.file_path}")
    typer.echo(f"interleave: {options.interleave.name}; data type: {options.data_type.token}; "
               f"big endian: {options.big_endian}; header offset: {options.header_offset}")
    typer.echo(f"rows: {options.num_data_rows}; cols: {options.num_data_cols}; bands: {options.num_data_bands}")


@app.command("extract")
def extract(
    header: Path = HEADER_OPTION,
    output: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="Output binary file (BSQ)"),
    range_file: Optional[Path] = RANGE_FILE_OPTION,
    start_row: Optional[int] = typer.Option(None, help="First row (inclusive)"),
    end_row: Optional[int] = typer.Option(None, help="Last row (exclusive)"),
    start_col: Optional[int] = typer.Option(None, help="First column (inclusive)"),
    end_col: Optional[int] = typer.Option(None, help="Last column (exclusive)"),
    start_band: Optional[int] = typer.Option(None, help="First band (inclusive)"),
    end_band: Optional[int] = typer.Option(None, help="Last band (exclusive)"),
    no_header: bool = typer.Option(False, help="Do not write an ENVI .hdr next to the output"),
    overwrite: bool = typer.Option(False, help="Replace an existing .hdr next to the output"),
    progress: bool = typer.Option(False, help="Show a progress bar while reading"),
) -> None:
    """Read a sub-range and write it out as a BSQ file in the source byte order."""
    hdr_path = output.with_suffix(".hdr")
    if not no_header and hdr_path.exists() and not overwrite:
        typer.echo(f"FAILED: {hdr_path} already exists; pass --overwrite to replace it", err=True)
        raise typer.Exit(code=1)
    options = _load_options(header)
    data_range = _build_range(options, range_file, start_row, end_row, start_col, end_col, start_band, end_band)
    reader = _read(options, data_range, progress=progress)
    status = reader.write_data(output)
    if not status:
        typer.echo(f"FAILED: {status.message}", err=True)
        raise typer.Exit(code=1)
    if not no_header:
        status = write_header(reader.cube, hdr_path, big_endian=options.big_endian, data_path=output)
        if not status:
            typer.echo(f"FAILED: {status.message}", err=True)
            raise typer.Exit(code=1)
    cube = reader.cube
    typer.echo(f"rows={cube.num_rows} cols={cube.num_cols} bands={cube.num_bands} -> {output}")


@app.command("value")
def value(
    header: Path = HEADER_OPTION,
    row: int = typer.Option(..., help="Row index in the full cube"),
    col: int = typer.Option(..., help="Column index in the full cube"),
    band: int = typer.Option(..., help="Band index in the full cube"),
) -> None:
    """Print a single value, reading only that scalar from disk."""
    options = _load_options(header)
    reader = _read(options, DataRange(row, row + 1, col, col + 1, band, band + 1))
    typer.echo(str(reader.cube.get_value(0, 0, 0).value))


@app.command("spectrum")
def spectrum(
    header: Path = HEADER_OPTION,
    row: int = typer.Option(..., help="Row index in the full cube"),
    col: int = typer.Option(..., help="Column index in the full cube"),
    start_band: int = typer.Option(0, help="First band (inclusive)"),
    end_band: Optional[int] = typer.Option(None, help="Last band (exclusive); default all"),
) -> None:
    """Print the spectrum of one pixel, one value per line."""
    options = _load_options(header)
    last = options.num_data_bands if end_band is None else end_band
    reader = _read(options, DataRange(row, row + 1, col, col + 1, start_band, last))
    for v in reader.cube.get_spectrum(0, 0):
        typer.echo(str(v.value))


@app.command("export-h5")
def export_h5(
    header: Path = HEADER_OPTION,
    h5_path: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="Target HDF5 file"),
    range_file: Optional[Path] = RANGE_FILE_OPTION,
    dataset: str = typer.Option("cube", help="Dataset name inside the HDF5 file"),
    overwrite: bool = typer.Option(False, help="Replace the dataset if it exists"),
) -> None:
    """Read a sub-range and store it as an HDF5 dataset."""
    from .io.hdf5_writer import H5ExportOptions, export_h5 as export_h5_fn

    options = _load_options(header)
    data_range = _build_range(options, range_file, None, None, None, None, None, None)
    reader = _read(options, data_range)
    try:
        export_h5_fn(reader.cube, h5_path, H5ExportOptions(dataset=dataset, overwrite=overwrite))
    except FileExistsError as e:
        typer.echo(f"FAILED: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"{h5_path}:{dataset}")


@app.command("quicklook")
def quicklook(
    header: Path = HEADER_OPTION,
    band: int = typer.Option(..., help="Band index in the full cube"),
    png_path: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="Output PNG"),
) -> None:
    """Render one band of the full image as a grayscale PNG."""
    from .io.quicklook import save_band_png

    options = _load_options(header)
    data_range = DataRange(0, options.num_data_rows, 0, options.num_data_cols, band, band + 1)
    reader = _read(options, data_range)
    save_band_png(reader.cube, 0, png_path)
    typer.echo(str(png_path))
