"""Run the news search server with ``python -m newsdesk``."""

from newsdesk.cli import main

main()
