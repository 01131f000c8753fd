from notesite_kit.cli import cli

cli()
