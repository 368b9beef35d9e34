"""Entry point for running as module: python -m mynthswap"""

from mynthswap.cli import main

if __name__ == "__main__":
    main()
