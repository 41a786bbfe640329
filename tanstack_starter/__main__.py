"""Allow ``python -m tanstack_starter``."""

from tanstack_starter.cli import main

main()
