import typer

from ts_expect_errors.cli.add import add
from ts_expect_errors.cli.remove import remove

app = typer.Typer(
    name="ts-expect-errors",
    help="ts-expect-errors: suppress type errors with expect-error markers.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("add")(add)
app.command("remove")(remove)


def main() -> None:
    app()
