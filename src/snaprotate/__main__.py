"""Allow running snaprotate with ``python -m snaprotate``."""

from snaprotate.cli import main

main()
