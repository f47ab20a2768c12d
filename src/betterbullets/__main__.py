"""Allow ``python -m betterbullets``."""

from betterbullets import main

if __name__ == "__main__":
    main()
