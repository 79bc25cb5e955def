"""Allow running tsk with ``python -m tsk``."""

from tsk.cli import main

if __name__ == "__main__":
    main()
