"""
`ethtx` is a CLI tool to hash, encode, sign and decode typed transactions.

Transactions are read as envelope JSON, the same format produced by `ethtx decode`:

    {"type": "0x02", "nonce": "0x2", "to": "0x9621...b05E", "chainId": "0x539", ...}
"""

import json
from typing import Any, TextIO

import click
from pydantic import ValidationError

from ethereum_tx_base_types import to_json, to_number
from ethereum_tx_config import Config, EnvConfig
from ethereum_tx_exceptions import TransactionDecodeError, TransactionEncodingError
from ethereum_tx_logging import configure_logging, get_logger
from ethereum_tx_types import TypedTransaction

logger = get_logger(__name__)


class ChainIdType(click.ParamType):
    """Chain id given in decimal or as a `0x` hex string."""

    name = "chain_id"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None):
        """Convert the option value to an unsigned integer."""
        try:
            return to_number(value)
        except ValueError as e:
            self.fail(f"{value!r} is not a valid chain id: {e}", param, ctx)


chain_id_option = click.option(
    "--chain-id",
    type=ChainIdType(),
    default=None,
    help=(
        "Chain id to sign for. Dynamic fee transactions use their own `chainId`; "
        "others default to the configured chain id."
    ),
)


def load_transaction(transaction_file: TextIO) -> TypedTransaction:
    """Parse envelope JSON into a typed transaction."""
    try:
        data = json.load(transaction_file)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"invalid JSON: {e}") from e
    try:
        return TypedTransaction.model_validate(data)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(loc) for loc in error['loc']) or 'transaction'}: {error['msg']}"
            for error in e.errors()
        )
        raise click.ClickException(f"invalid transaction: {errors}") from e


def resolve_chain_id(
    transaction: TypedTransaction, chain_id: int | None, config: Config
) -> int | None:
    """Return the chain id to encode with, falling back to the configured one."""
    if chain_id is None and transaction.chain_id is None:
        return config.chain_id
    return chain_id


@click.group(context_settings=dict(help_option_names=["-h", "--help"], max_content_width=120))
@click.option(
    "--log-level",
    default=None,
    help="DEBUG, VERBOSE, INFO, WARNING, ERROR or CRITICAL; defaults to the configured level.",
)
@click.pass_context
def ethtx(ctx: click.Context, log_level: str | None):
    """
    `ethtx` is a CLI tool to hash, encode, sign and decode typed transactions.
    """
    try:
        config = EnvConfig()
        configure_logging(log_level or config.log_level)
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    ctx.obj = config


@ethtx.command(short_help="Print the signing hash of a transaction.")
@chain_id_option
@click.argument("transaction_file", type=click.File("r"))
@click.pass_obj
def sighash(config: Config, transaction_file: TextIO, chain_id: int | None):
    """
    Print the hash signed by the sender of the transaction in TRANSACTION_FILE.

    TRANSACTION_FILE is a JSON file containing the transaction, use `-` to read from stdin.
    """
    transaction = load_transaction(transaction_file)
    try:
        signing_hash = transaction.sighash(resolve_chain_id(transaction, chain_id, config))
    except TransactionEncodingError as e:
        raise click.ClickException(str(e)) from e
    click.echo(str(signing_hash))


@ethtx.command(short_help="Print the unsigned encoding of a transaction.")
@chain_id_option
@click.argument("transaction_file", type=click.File("r"))
@click.pass_obj
def encode(config: Config, transaction_file: TextIO, chain_id: int | None):
    """
    Print the type-prefixed unsigned encoding of the transaction in TRANSACTION_FILE.

    TRANSACTION_FILE is a JSON file containing the transaction, use `-` to read from stdin.
    """
    transaction = load_transaction(transaction_file)
    try:
        encoded = transaction.encode_unsigned(resolve_chain_id(transaction, chain_id, config))
    except TransactionEncodingError as e:
        raise click.ClickException(str(e)) from e
    click.echo(str(encoded))


@ethtx.command(short_help="Sign a transaction and print the raw signed transaction.")
@chain_id_option
@click.option("--secret-key", required=True, help="Secret key of the sender, as hex.")
@click.argument("transaction_file", type=click.File("r"))
@click.pass_obj
def sign(config: Config, transaction_file: TextIO, secret_key: str, chain_id: int | None):
    """
    Sign the transaction in TRANSACTION_FILE and print the signed encoding and its hash.

    TRANSACTION_FILE is a JSON file containing the transaction, use `-` to read from stdin.

    Output:

        \b
        <raw signed transaction>
        <transaction hash>
    """  # noqa: D301
    transaction = load_transaction(transaction_file)
    try:
        signature = transaction.sign(secret_key, resolve_chain_id(transaction, chain_id, config))
    except TransactionEncodingError as e:
        raise click.ClickException(str(e)) from e
    except ValueError as e:
        raise click.ClickException(f"invalid secret key: {e}") from e
    click.echo(str(transaction.encode_signed(signature)))
    click.echo(str(transaction.hash(signature)))


@ethtx.command(short_help="Decode a raw signed transaction into JSON.")
@click.argument("raw_transaction")
def decode(raw_transaction: str):
    """
    Decode RAW_TRANSACTION, a hex encoded signed transaction, and print it as JSON.
    """
    try:
        transaction, signature = TypedTransaction.decode_signed(raw_transaction)
    except TransactionDecodeError as e:
        raise click.ClickException(str(e)) from e
    logger.verbose(f"Decoded a type {int(transaction.transaction_type)} transaction")
    click.echo(
        json.dumps(
            {
                "transaction": to_json(transaction),
                "signature": to_json(signature),
                "hash": str(transaction.hash(signature)),
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    ethtx()
