"""Allow running as python -m mindful."""

from .main import main

if __name__ == "__main__":
    main()
