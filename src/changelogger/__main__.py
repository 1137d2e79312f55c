"""Allow running changelogger with ``python -m changelogger``."""

from changelogger.cli import main

main()
