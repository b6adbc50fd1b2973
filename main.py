"""Entry point for running perlgib from a source checkout."""

from perlgib.gib import main

if __name__ == "__main__":
    raise SystemExit(main())
