"""
witu CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import logging

import click

from .commands import export, ranks, render


@click.group()
@click.version_option(package_name="witu")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """witu: Where Is This Used?

    Visualize and export metadata dependency graphs.

    \b
    Quick Start:
      witu render blast_radius.json -o blast_radius.html --open
      witu export blast_radius.json --view blast-radius --format csv
      witu ranks blast_radius.json
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(message)s",
            datefmt="[%X]",
        )


# Register commands
main.add_command(render.render)
main.add_command(export.export)
main.add_command(ranks.ranks)

if __name__ == "__main__":
    main()
