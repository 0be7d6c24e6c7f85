"""chartwright command line interface.

The typer application lives in ``src.cli.main``; this package is kept free
of eager imports so the deployment subpackages can be used on their own.
"""
