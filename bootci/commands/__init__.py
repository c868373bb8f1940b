"""Click subcommands registered on the ``bootci`` group."""
