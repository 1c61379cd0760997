#!/usr/bin/env python3
"""
Main entry point for mailgroups (after `pip install -e .`).

    python main.py match alice@example.com
    python main.py match boss@example.com --group vip
    python main.py --config config/groups.yaml list

See --help for available options.
"""

from mailgroups.cli import main


if __name__ == '__main__':
    main()
