import base64
import logging
from dotenv import load_dotenv

# Load env immediately
load_dotenv()

import click

from config.loader import get_config
from utils.logging import setup_logging
from codec.alphabet import Alphabet
from codec.decoder import decode
from codec.encoder import encode
from codec.errors import DecodeError
from credentials.reader import CredentialFileError, load_credentials, read_credential_file
from verifier.verifier import check_digest_algorithm, verify_encoded

logger = logging.getLogger("CredentialCodec")

EXIT_INPUT_ERROR = 1
EXIT_MISMATCH = 2


def read_source(source: str) -> bytes:
    # "-" reads from stdin so large keys never end up on the command line
    if source == "-":
        with click.open_file(source, "rb") as f:
            return f.read()
    return read_credential_file(source)


def read_encoded(source: str) -> str:
    # Pasted strings often pick up a trailing newline
    return read_source(source).decode("utf-8", errors="replace").strip()


def section(config, name: str) -> dict:
    # An empty YAML section loads as None
    return config.get(name) or {}


def build_alphabet(config) -> Alphabet:
    symbols = section(config, "codec").get("alphabet")
    return Alphabet(symbols=symbols) if symbols else Alphabet()


def verification_settings(config):
    settings = section(config, "verification")
    digest_algorithm = check_digest_algorithm(settings.get("digest_algorithm", "sha256"))
    return digest_algorithm, settings.get("preview_bytes", 200)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, verbose):
    """Encode credential files as a paste-safe base62 string."""
    config = get_config()
    level = "DEBUG" if verbose else section(config, "logging").get("level", "INFO")
    setup_logging(level)
    ctx.ensure_object(dict)
    ctx.obj['config'] = config
    try:
        ctx.obj['alphabet'] = build_alphabet(config)
    except ValueError as e:
        logger.error(f"❌ Invalid codec.alphabet in config: {e}")
        ctx.exit(EXIT_INPUT_ERROR)


@cli.command('encode')
@click.argument('source')
@click.option('--compact/--no-compact', default=None,
              help='Re-serialize JSON without whitespace before encoding')
@click.option('--verify/--no-verify', 'do_verify', default=None,
              help='Decode the result and compare digests before printing')
@click.option('--allow-mismatch', is_flag=True,
              help='Print the encoded string even if verification fails')
@click.option('--base64', 'with_base64', is_flag=True,
              help='Also print the standard base64 form')
@click.pass_context
def cmd_encode(ctx, source, compact, do_verify, allow_mismatch, with_base64):
    """Encode a credential file (or - for stdin)."""
    config = ctx.obj['config']
    alphabet = ctx.obj['alphabet']
    if compact is None:
        compact = section(config, "credentials").get("compact_json", True)
    if do_verify is None:
        do_verify = section(config, "verification").get("enabled", True)

    try:
        payload = load_credentials(read_source(source), compact=compact)
    except CredentialFileError as e:
        logger.error(f"❌ {e}")
        ctx.exit(EXIT_INPUT_ERROR)

    logger.info(f"Loaded {len(payload.raw)} bytes of {payload.kind} credentials")
    for key, value in payload.details.items():
        logger.info(f"  {key}: {value}")

    encoded = encode(payload.raw, alphabet)

    if do_verify:
        try:
            digest_algorithm, preview_bytes = verification_settings(config)
        except ValueError as e:
            logger.error(f"❌ {e}")
            ctx.exit(EXIT_INPUT_ERROR)
        result = verify_encoded(payload.raw, encoded, alphabet, digest_algorithm, preview_bytes)
        if result.ok:
            logger.info(f"✅ Round trip verified ({digest_algorithm} {result.original_digest})")
        else:
            logger.warning(result.diagnostic())
            if not allow_mismatch:
                logger.error("Refusing to print an unverified key. Use --allow-mismatch to override.")
                ctx.exit(EXIT_MISMATCH)

    click.echo(encoded)
    if with_base64:
        click.echo(base64.b64encode(payload.raw).decode("ascii"))


@cli.command('decode')
@click.argument('encoded_source')
@click.option('--output', '-o', type=click.Path(dir_okay=False, writable=True),
              help='Write decoded bytes here instead of stdout')
@click.pass_context
def cmd_decode(ctx, encoded_source, output):
    """Decode a string (file or - for stdin) back to the original bytes."""
    try:
        decoded = decode(read_encoded(encoded_source), ctx.obj['alphabet'])
    except (CredentialFileError, DecodeError) as e:
        logger.error(f"❌ {e}")
        ctx.exit(EXIT_INPUT_ERROR)

    with click.open_file(output or "-", "wb") as f:
        f.write(decoded)
    if output:
        logger.info(f"Wrote {len(decoded)} bytes to {output}")


@cli.command('verify')
@click.argument('source')
@click.argument('encoded_source')
@click.option('--compact/--no-compact', default=None,
              help='Compact SOURCE the same way encode does before comparing')
@click.pass_context
def cmd_verify(ctx, source, encoded_source, compact):
    """Check that an encoded string decodes to exactly SOURCE."""
    config = ctx.obj['config']
    if compact is None:
        compact = section(config, "credentials").get("compact_json", True)
    if source == "-" and encoded_source == "-":
        raise click.UsageError("Only one of SOURCE and ENCODED_SOURCE may be stdin")

    try:
        digest_algorithm, preview_bytes = verification_settings(config)
        original = load_credentials(read_source(source), compact=compact).raw
        encoded = read_encoded(encoded_source)
    except (CredentialFileError, ValueError) as e:
        logger.error(f"❌ {e}")
        ctx.exit(EXIT_INPUT_ERROR)

    result = verify_encoded(original, encoded, ctx.obj['alphabet'], digest_algorithm, preview_bytes)
    if not result.ok:
        logger.warning(result.diagnostic())
        ctx.exit(EXIT_MISMATCH)

    logger.info(f"✅ Encoded string matches {source} ({digest_algorithm} {result.original_digest})")
    click.echo("OK")


def main():
    cli(obj={})

if __name__ == "__main__":
    main()
