"""CLI commands implemented with click.

The salt comes from --salt / $SALT_HEX, falling back to the built-in
development salt (with a warning).
"""
from __future__ import annotations
import json, logging, click
from salty.lib import base91
from salty.lib.crypto import CryptoError
from salty.lib.utils import MessageService, InputError

def _fail(msg: str):
	click.echo(f'Error: {msg}')
	raise SystemExit(1)

def _service(ctx: click.Context) -> MessageService:
	try:
		return MessageService(ctx.obj.get('salt'), lenient=ctx.obj.get('lenient', False))
	except CryptoError as e:
		_fail(str(e))

@click.group()
@click.option('--salt', envvar='SALT_HEX', default=None, help='Deployment salt as 32 hex characters.')
@click.option('--lenient-salt', is_flag=True, help='Warn instead of failing when the salt does not decode to 16 bytes.')
@click.option('-v', '--verbose', is_flag=True, help='Enable debug logging.')
@click.pass_context
def cli(ctx, salt, lenient_salt, verbose):
	"""salty: passphrase encryption for text-only channels"""
	if verbose:
		logging.getLogger('salty').setLevel(logging.DEBUG)
	ctx.ensure_object(dict)
	ctx.obj.update(salt=salt, lenient=lenient_salt)

@cli.command()
@click.option('--key', prompt=True, hide_input=True, help='Passphrase shared with the recipient.')
@click.option('--message', prompt=True, help="Message text, or '-' to read stdin.")
@click.pass_context
def encrypt(ctx, key, message):
	"""Encrypt a message into a basE91 token."""
	svc = _service(ctx)
	if message == '-':
		message = click.get_text_stream('stdin').read()
	try:
		click.echo(svc.encrypt(message, key))
	except (CryptoError, InputError) as e:
		_fail(str(e))

@cli.command()
@click.option('--key', prompt=True, hide_input=True)
@click.option('--token', prompt=True, help="basE91 token, or '-' to read stdin.")
@click.pass_context
def decrypt(ctx, key, token):
	"""Decrypt a basE91 token back to the message."""
	svc = _service(ctx)
	if token == '-':
		token = click.get_text_stream('stdin').read()
	try:
		plain = svc.decrypt(token, key)
	except InputError as e:
		_fail(str(e))
	if plain is None:
		# Same message for wrong key, tampering and garbage
		_fail('Decryption failed')
	click.echo(plain)

@cli.command()
@click.pass_context
def info(ctx):
	"""Show algorithm parameters and salt status."""
	click.echo(json.dumps(_service(ctx).info(), indent=2))


# --- basE91 subcommands (raw codec, no encryption) ---

@cli.group('base91')
def base91_cmd():
	"""Encode/decode raw data as basE91."""

@base91_cmd.command('encode')
@click.argument('infile', type=click.File('rb'), default='-')
def base91_encode(infile):
	"""Encode a file (or stdin) to basE91."""
	click.echo(base91.encode(infile.read()))

@base91_cmd.command('decode')
@click.argument('infile', type=click.File('r'), default='-')
def base91_decode(infile):
	"""Decode basE91 text from a file (or stdin) to raw bytes on stdout."""
	data = base91.decode(infile.read())
	if data is None:
		_fail('Nothing to decode')
	out = click.get_binary_stream('stdout')
	out.write(data)
	out.flush()
