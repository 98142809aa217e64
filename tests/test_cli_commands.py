import json
from click.testing import CliRunner
from salty.cli.commands import cli

SALT = '0123456789ABCDEF0123456789ABCDEF'

def test_cli_encrypt_and_decrypt(monkeypatch):
    monkeypatch.setenv('SALT_HEX', SALT)
    runner = CliRunner()
    enc = runner.invoke(cli, ['encrypt'], input='test-password-123\nHello, World!\n')
    assert enc.exit_code == 0
    token = enc.output.strip().splitlines()[-1]
    dec = runner.invoke(cli, ['decrypt', '--key', 'test-password-123', '--token', token])
    assert dec.exit_code == 0
    assert dec.output.strip() == 'Hello, World!'

def test_cli_decrypt_wrong_key():
    runner = CliRunner()
    enc = runner.invoke(cli, ['--salt', SALT, 'encrypt', '--key', 'right', '--message', 'secret'])
    token = enc.output.strip()
    dec = runner.invoke(cli, ['--salt', SALT, 'decrypt', '--key', 'wrong', '--token', token])
    assert dec.exit_code == 1
    assert 'Error: Decryption failed' in dec.output
    assert 'secret' not in dec.output

def test_cli_message_from_stdin():
    runner = CliRunner()
    enc = runner.invoke(cli, ['--salt', SALT, 'encrypt', '--key', 'pw', '--message', '-'], input='line one\nline two\n')
    assert enc.exit_code == 0
    dec = runner.invoke(cli, ['--salt', SALT, 'decrypt', '--key', 'pw', '--token', '-'], input=enc.output)
    assert dec.exit_code == 0
    assert dec.output == 'line one\nline two\n\n'

def test_cli_rejects_short_salt():
    r = CliRunner().invoke(cli, ['--salt', 'ABCD', 'encrypt', '--key', 'pw', '--message', 'hi'])
    assert r.exit_code == 1
    assert 'Error: Salt must decode to 16 bytes' in r.output

def test_cli_lenient_salt_allows_short_salt():
    runner = CliRunner()
    enc = runner.invoke(cli, ['--salt', 'ABCD', '--lenient-salt', 'encrypt', '--key', 'pw', '--message', 'hi'])
    assert enc.exit_code == 0
    dec = runner.invoke(cli, ['--salt', 'ABCD', '--lenient-salt', 'decrypt', '--key', 'pw', '--token', enc.output.strip()])
    assert dec.output.strip() == 'hi'

def test_cli_key_too_long():
    r = CliRunner().invoke(cli, ['--salt', SALT, 'encrypt', '--key', 'k' * 2000, '--message', 'hi'])
    assert r.exit_code == 1
    assert 'maximum length' in r.output

def test_cli_info(monkeypatch):
    monkeypatch.delenv('SALT_HEX', raising=False)
    r = CliRunner().invoke(cli, ['info'])
    assert r.exit_code == 0
    data = json.loads(r.output[r.output.index('{'):])
    assert data['encoding'] == 'basE91'
    assert data['salt']['default'] is True

def test_cli_base91_encode_decode():
    runner = CliRunner()
    enc = runner.invoke(cli, ['base91', 'encode'], input=b'test')
    assert enc.exit_code == 0
    assert enc.output.strip() == 'fPNKd'
    dec = runner.invoke(cli, ['base91', 'decode'], input='fPNKd\n')
    assert dec.exit_code == 0
    assert dec.stdout_bytes == b'test'

def test_cli_base91_decode_nothing():
    r = CliRunner().invoke(cli, ['base91', 'decode'], input='   \n')
    assert r.exit_code == 1
    assert 'Nothing to decode' in r.output
