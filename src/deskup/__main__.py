"""Allow `python -m deskup`."""

from .cli import main

main()
