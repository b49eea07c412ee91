"""typer CLI for running the SwitchBot relay and its mock upstream locally."""
