"""
Allow ``python -m minicurl``.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from minicurl.cli import main

if __name__ == "__main__":
    main()
