from propcat.cli import cli

cli()
