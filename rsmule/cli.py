"""
CLI interface for rs-mule.

Runs a RightScript or Chef recipe on every instance that carries a set of
tags.

Authentication parameters are read from --rs-auth-hash or from a YAML file
given with --rs-auth-file.
"""

from pathlib import Path

import click
import requests

from rsmule import __version__
from rsmule.config import RunExecutableOptions, load_auth_config
from rsmule.errors import ConfigError, RsMuleError
from rsmule.executable import ExecutableType, TagMatchStrategy, UpdateTarget
from rsmule.utils import print_error, print_info, print_success, print_warning, setup_logging


class KeyValueType(click.ParamType):
    """A NAME:VALUE pair, split on the first colon."""

    name = "key:value"

    def convert(self, value, param, ctx):
        if isinstance(value, tuple):
            return value
        key, sep, val = value.partition(":")
        if not sep or not key:
            self.fail(f"{value!r} is not in the form NAME:VALUE", param, ctx)
        return key, val


KEY_VALUE = KeyValueType()


def _choices(enum_cls) -> click.Choice:
    return click.Choice([m.value for m in enum_cls])


def get_right_api_client(rs_auth_file: Path | None, rs_auth_hash: dict):
    """Build an authenticated RightApiClient, exiting on bad auth config."""
    from rsmule.right_api.client import RightApiClient

    try:
        auth = load_auth_config(auth_file=rs_auth_file, auth_hash=rs_auth_hash)
    except ConfigError as e:
        print_error(str(e))
        raise SystemExit(1)

    try:
        return RightApiClient(**auth.to_client_kwargs())
    except requests.RequestException as e:
        print_error(f"Login failed: {e}")
        raise SystemExit(1)


@click.group()
@click.version_option(version=__version__, prog_name="rs-mule")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write JSON log lines to this file",
)
def main(verbose: bool, log_file: Path | None):
    """
    rs-mule - Run RightScripts and recipes on instances selected by tag.
    """
    setup_logging("DEBUG" if verbose else "INFO", log_file=log_file)


@main.command("run_executable")
@click.argument("executable")
@click.option(
    "--tags",
    multiple=True,
    required=True,
    help="Tag an instance must carry. Repeat for multiple tags.",
)
@click.option(
    "--tag-match-strategy",
    type=_choices(TagMatchStrategy),
    default=TagMatchStrategy.ALL.value,
    show_default=True,
    help='If multiple tags are specified, "all" matches instances with every tag '
         'and "any" matches instances with at least one of them.',
)
@click.option(
    "--executable-type",
    type=_choices(ExecutableType),
    default=ExecutableType.AUTO.value,
    show_default=True,
    help="What value is being provided for EXECUTABLE.",
)
@click.option(
    "--right-script-revision",
    default="latest",
    show_default=True,
    help='When a RightScript name is provided, the revision to use. "latest" picks the '
         'highest committed revision, 0 is HEAD.',
)
@click.option(
    "--inputs",
    type=KEY_VALUE,
    multiple=True,
    help="Input for the executable as NAME:VALUE, e.g. MY_INPUT:text:hello. Repeatable.",
)
@click.option(
    "--update-inputs",
    type=_choices(UpdateTarget),
    multiple=True,
    help="Also update the inputs of this object. Repeatable.",
)
@click.option(
    "--rs-auth-hash",
    type=KEY_VALUE,
    multiple=True,
    help="Auth parameter as KEY:VALUE (email:foo@bar.baz, password:secret, account_id:12345). Repeatable.",
)
@click.option(
    "--rs-auth-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="A YAML file containing auth parameters.",
)
def run_executable(
    executable: str,
    tags: tuple[str, ...],
    tag_match_strategy: str,
    executable_type: str,
    right_script_revision: str,
    inputs: tuple[tuple[str, str], ...],
    update_inputs: tuple[str, ...],
    rs_auth_hash: tuple[tuple[str, str], ...],
    rs_auth_file: Path | None,
):
    """
    Run a recipe or RightScript on instances targeted by tag.

    EXECUTABLE is a RightScript name, a RightScript href or a recipe name.

    Examples:

        rs-mule run_executable "cookbook::recipe" --tags role:web --rs-auth-file auth.yaml

        rs-mule run_executable "Deploy App" --tags role:web --tags env:prod \\
            --inputs APP_VERSION:text:1.2.3 --update-inputs deployment \\
            --rs-auth-hash email:me@example.com --rs-auth-hash password:secret \\
            --rs-auth-hash account_id:12345
    """
    from rsmule.run_executable import RunExecutable

    if update_inputs and not inputs:
        print_warning("--update-inputs given without --inputs; targets will be updated with no inputs")

    try:
        options = RunExecutableOptions(
            executable_type=executable_type,
            right_script_revision=right_script_revision,
            tag_match_strategy=tag_match_strategy,
            inputs=dict(inputs),
            update_inputs=list(update_inputs),
        )
    except ConfigError as e:
        print_error(str(e))
        raise SystemExit(1)

    client = get_right_api_client(rs_auth_file, dict(rs_auth_hash))

    try:
        dispatched = RunExecutable(client).run_executable(list(tags), executable, options)
    except RsMuleError as e:
        print_error(str(e))
        raise SystemExit(1)
    except requests.RequestException as e:
        print_error(f"{executable} failed: {e}")
        raise SystemExit(1)

    if not dispatched:
        print_info(f"No instances matched {list(tags)}")
        return

    print_success(f"Ran {executable} on {len(dispatched)} instance(s)")
    for href in dispatched:
        click.echo(f"  {href}")


if __name__ == "__main__":
    main()
