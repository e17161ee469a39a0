"""Package entry point for ``python -m jyt``.

WHY: Lets users run the converter without the console script, e.g.
``python -m jyt -t yaml config.json``.

HOW: Delegates straight to the CLI's main() function.
"""

from jyt.cli import main

if __name__ == "__main__":
    main()
