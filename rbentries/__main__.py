"""Module entrypoint for ``python -m rbentries``.

This keeps module-mode execution behavior identical to the console script.
All argument parsing happens in ``rbentries.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
