"""
CLI Entry Point: Exposes the varset functionality via command line.
"""

import logging
from pathlib import Path

import typer
from pydantic import ValidationError

from . import __version__
from .exceptions import VarsetError
from .genome.locus import parse_interval
from .io.output import RleTrackWriter
from .models.core import LoadMode, VarsetConfig
from .pipeline import Pipeline
from .regions.bitset import GenomeBitSet
from .utils.logging import console, setup_logging

app = typer.Typer(help="varset: genome-ordered variant sets with fast locus search")

logger = logging.getLogger(__name__)

VariantsOption = typer.Option(..., "--variants", "-v", help="Variant table (plain, .gz, .bz2, or - for stdin)")
GenomeOption = typer.Option(..., "--genome", "-g", help="Reference FASTA or .fai index defining chromosome order")
LenientOption = typer.Option(False, "--lenient", help="Skip malformed lines instead of failing")
KeepMultiBaseOption = typer.Option(True, help="Keep multi-base records")
VerboseOption = typer.Option(False, "--verbose", "-V", help="Enable verbose debug logging")


def _fail(message: str, error: Exception | None = None) -> None:
    console.print(f"[bold red]Error: {message}[/bold red]")
    raise typer.Exit(code=1) from error


def _pipeline(variants: Path, genome_file: Path, lenient: bool, **options) -> Pipeline:
    try:
        config = VarsetConfig(
            variant_file=variants,
            genome_file=genome_file,
            load_mode=LoadMode.LENIENT if lenient else LoadMode.STRICT,
            **options,
        )
    except ValidationError as e:
        _fail(str(e), e)
    return Pipeline(config)


@app.callback()
def main():
    """
    varset: genome-ordered variant sets with fast locus search
    """
    pass


@app.command()
def version():
    """Show the version."""
    typer.echo(f"py-varset {__version__}")


@app.command()
def separate(
    variants: Path = VariantsOption,
    genome_file: Path = GenomeOption,
    output: Path = typer.Option(..., "--output", "-o", help="Output table (.gz/.bz2 compress, - for stdout)"),
    lenient: bool = LenientOption,
    verbose: bool = VerboseOption,
):
    """
    Split adjacent multi-base substitutions into single-base variants.
    """
    setup_logging(verbose=verbose)

    pipeline = _pipeline(
        variants, genome_file, lenient, output_file=output, keep_multi_base=True, separate=True
    )
    try:
        result = pipeline.run()
    except (VarsetError, OSError) as e:
        _fail(str(e), e)

    decomposition = result.decomposition
    if decomposition is not None:
        console.print(
            f"Separated [bold]{decomposition.records_split}[/bold] records: "
            f"{decomposition.records_before} -> {decomposition.records_after}"
        )


@app.command()
def query(
    loci: list[str] = typer.Argument(..., help="Loci as chromosome:position"),
    variants: Path = VariantsOption,
    genome_file: Path = GenomeOption,
    keep_multi_base: bool = KeepMultiBaseOption,
    lenient: bool = LenientOption,
    max_linear_steps: int = typer.Option(3, "--max-linear-steps", help="Steps tried before binary search"),
    verbose: bool = VerboseOption,
):
    """
    Print the stored variant at each locus, or report it missing.
    """
    setup_logging(verbose=verbose, quiet=not verbose)

    pipeline = _pipeline(
        variants,
        genome_file,
        lenient,
        keep_multi_base=keep_multi_base,
        separate=False,
        max_linear_steps=max_linear_steps,
    )
    try:
        records = pipeline.query(loci)
    except (VarsetError, OSError) as e:
        _fail(str(e), e)

    genome = pipeline.load().genome
    for text, record in zip(loci, records):
        if record is None:
            console.print(f"[yellow]{text}: not found[/yellow]")
        else:
            typer.echo(record.to_line(genome), nl=False)
    logger.debug("%d of %d loci not found", records.count(None), len(loci))


@app.command()
def count(
    regions: list[str] = typer.Argument(..., help="Closed intervals as chromosome:start-end"),
    variants: Path = VariantsOption,
    genome_file: Path = GenomeOption,
    keep_multi_base: bool = KeepMultiBaseOption,
    lenient: bool = LenientOption,
    threads: int = typer.Option(1, "--threads", "-t", help="Number of threads"),
    verbose: bool = VerboseOption,
):
    """
    Count variants inside closed intervals.
    """
    setup_logging(verbose=verbose, quiet=not verbose)

    pipeline = _pipeline(
        variants, genome_file, lenient, keep_multi_base=keep_multi_base, separate=False, threads=threads
    )
    try:
        intervals = [parse_interval(text) for text in regions]
        counts = pipeline.count(intervals)
    except (VarsetError, OSError) as e:
        _fail(str(e), e)

    for text, n in zip(regions, counts):
        typer.echo(f"{text}\t{n}")


@app.command()
def mask(
    chrom: str = typer.Argument(..., help="Chromosome to export"),
    variants: Path = VariantsOption,
    genome_file: Path = GenomeOption,
    output: Path = typer.Option(Path("-"), "--output", "-o", help="Output track (- for stdout)"),
    keep_multi_base: bool = KeepMultiBaseOption,
    lenient: bool = LenientOption,
    verbose: bool = VerboseOption,
):
    """
    Write a run-length encoded 0/1 track of variant positions on one chromosome.
    """
    setup_logging(verbose=verbose, quiet=not verbose)

    pipeline = _pipeline(variants, genome_file, lenient, keep_multi_base=keep_multi_base, separate=False)
    try:
        store = pipeline.load()
        if not store.genome.contains(chrom):
            _fail(f"Chromosome not in genome: {chrom}")
        bitset = GenomeBitSet.from_store(store)
        with RleTrackWriter(output) as writer:
            writer.write_track(bitset.get_range(chrom, 0, store.genome.length_of(chrom)), value_label=chrom)
    except (VarsetError, OSError) as e:
        _fail(str(e), e)


if __name__ == "__main__":
    app()
