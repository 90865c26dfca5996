"""Entry point for 'python -m lms_modules'."""

from lms_modules.cli import main

if __name__ == "__main__":
    main()
