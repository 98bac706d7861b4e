#!filepath: fmconvert/cli.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import yaml
from rich import print
from rich.markup import escape

from fmconvert import __version__
from fmconvert.config.app_config import AppConfig
from fmconvert.io.readers import read_matrix, read_vector, render_rows
from fmconvert.utils.errors import ConvertError
from fmconvert.utils.filesystem import FileSystem
from fmconvert.utils.logger import init_logging
from fmconvert.workflows.convert_workflow import convert_file

app = typer.Typer(help="Convert libFM text files into binary x / y files")

BANNER = "\n".join(
    [
        "-" * 76,
        "Convert",
        f"  Version: {__version__}",
        "-" * 76,
    ]
)


def _load_config(config: Optional[Path]) -> AppConfig:
    try:
        cfg = AppConfig.load(config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    init_logging(cfg.log)
    return cfg


@app.command()
def version():
    print(__version__)


@app.command()
def convert(
    ifile: Path = typer.Option(..., "--ifile", help="input file name, libFM text format [MANDATORY]"),
    ofilex: Path = typer.Option(..., "--ofilex", help="output file name for x [MANDATORY]"),
    ofiley: Path = typer.Option(..., "--ofiley", help="output file name for y [MANDATORY]"),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML config (default: bundled base.yml)"),
    discard: Optional[bool] = typer.Option(
        None, "--discard-on-failure/--keep-on-failure", help="delete partial outputs after a failure"
    ),
):
    """
    libFM 文本 → 二进制稀疏矩阵 x + 稠密向量 y
    """
    print(BANNER)
    cfg = _load_config(config)
    if discard is not None:
        cfg.convert.discard_on_failure = discard

    result = convert_file(ifile, ofilex, ofiley, cfg=cfg)

    if not result.ok:
        print(f"[red]{escape(result.message)}[/red]")
        raise typer.Exit(code=1)

    print(f"[green]{result.schema.summary()}[/green]")
    print(
        f"x: {result.matrix_path} ({FileSystem.format_size(FileSystem.get_file_size(result.matrix_path))})  "
        f"y: {result.vector_path} ({FileSystem.format_size(FileSystem.get_file_size(result.vector_path))})"
    )


@app.command()
def inspect(
    ofilex: Path = typer.Option(..., "--ofilex", help="binary x file"),
    ofiley: Path = typer.Option(..., "--ofiley", help="binary y file"),
    head: int = typer.Option(10, "--head", help="rows to render back as text (0 = all)"),
):
    """
    解码 x / y 并打印 header 与前几行（libFM 文本形式）
    """
    try:
        matrix = read_matrix(ofilex)
        vector = read_vector(ofiley)
        h = matrix.header
        print(
            f"[blue]x[/blue] magic_id={h.magic_id} num_values={h.num_values} "
            f"num_rows={h.num_rows} num_cols={h.num_cols} float_size={h.float_size}"
        )
        v = vector.header
        print(
            f"[blue]y[/blue] file_version={v.file_version} element_size={v.element_size} "
            f"num_rows={v.num_rows}"
        )
        for i, line in enumerate(render_rows(matrix, vector)):
            if head and i >= head:
                break
            typer.echo(line)
    except ConvertError as e:
        print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()

# python -m fmconvert.cli convert --ifile train.libfm --ofilex train.x --ofiley train.y
