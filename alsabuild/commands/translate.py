import click
from ..utils.triple_translator import translate as translate_triple

@click.command()
@click.argument("triple")
def translate(triple):
    """Print the autotools --host triple used when cross compiling for TRIPLE."""
    click.echo(translate_triple(triple))
