import dataclasses
import logging
import os

import click

from lightcone_installer.cli.output import print_install_summary
from lightcone_installer.core.constants import DEBUG_ENV_VAR
from lightcone_installer.core.context import InstallerContext, create_context
from lightcone_installer.core.venv_layout import venv_bin_dir
from lightcone_installer.core.workflow import run_install

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.command("lightcone-install", context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="lightcone-installer")
@click.option(
    "--ssh",
    "use_ssh",
    is_flag=True,
    default=False,
    help="Clone repositories over SSH (git@github.com:...) instead of HTTPS.",
)
@click.pass_context
def cli(ctx: click.Context, use_ssh: bool) -> None:
    """Install the Lightcone tools into a local development environment.

    Clones ASP, Canvas and Prism into ~/.lightcone (or $LIGHTCONE_DIR), links
    ASP into Prism/extern, then installs all three into a virtual environment.
    Safe to rerun: existing checkouts are fast-forwarded, and the saved venv
    choice is reused.
    """
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(use_ssh=use_ssh)
    installer_ctx: InstallerContext = ctx.obj
    if use_ssh and not installer_ctx.use_ssh:
        installer_ctx = dataclasses.replace(installer_ctx, use_ssh=True)
    logger.debug("Invoked with use_ssh=%s", installer_ctx.use_ssh)

    result = run_install(installer_ctx)

    bin_dir = None
    if result.config is not None and result.config.venv_mode == "new":
        bin_dir = venv_bin_dir(result.config.venv_path)
    print_install_summary(
        result.installed_packages, bin_dir, shell_configured=result.shell_configured
    )


def main() -> None:
    """CLI entry point used by the `lightcone-install` console script."""
    if os.getenv(DEBUG_ENV_VAR):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")
    cli()
