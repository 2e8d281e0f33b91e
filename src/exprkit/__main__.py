"""Entry point for 'python -m exprkit' command."""

from exprkit.cli import main

if __name__ == "__main__":
    main()
