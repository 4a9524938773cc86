"""Module entry point for the zonesync CLI."""

from .main import main

raise SystemExit(main())
