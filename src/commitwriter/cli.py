# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

import typer
from colorama import init
from dotenv import load_dotenv

from commitwriter.commands import generate
from commitwriter.constants import PROG_NAME
from commitwriter.runtimeutil import ensure_utf8_output, setup_signal_handlers

# Initialize colorama (colored output in terminal)
init(autoreset=True)

# main cli app
app = typer.Typer(
    help=f"{PROG_NAME}: turn your git diff into a commit message with some personality",
    pretty_exceptions_show_locals=False,
    pretty_exceptions_enable=False,
    add_completion=False,
)

# single command, runs without a subcommand name
app.command(name="generate")(generate.main)


def run_app():
    """Run the application with global exception handling."""
    # force stdout to be utf8
    ensure_utf8_output()
    # Set up signal handlers for graceful shutdown
    setup_signal_handlers()
    # load any .env files (config values possibly set through env)
    load_dotenv()
    # launch cli
    app(prog_name=PROG_NAME)


if __name__ == "__main__":
    run_app()
