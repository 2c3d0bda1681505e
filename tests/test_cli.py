"""
Integration tests for the command line interface.

Tests:
- keygen / validate / encrypt / decrypt end to end
- Error reporting and exit codes
"""

import tempfile
from pathlib import Path

import pytest
from rrsa.cli import build_parser, main
from rrsa.keys.key_files import read_key, read_key_pair


MESSAGE = b"Meet me at the usual place at ten. Bring the documents.\n"


@pytest.fixture
def workdir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def rrsa_home(monkeypatch, workdir):
    home = workdir / "home"
    monkeypatch.setenv("RRSA_HOME", str(home))
    return home


class TestParser:
    """Argument parsing."""

    def test_command_is_required(self):
        """No subcommand is a usage error."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_keygen_arguments(self):
        """Short flags map to keygen options."""
        args = build_parser().parse_args(["keygen", "-k", "64", "-o", "keys/", "-n", "-r", "-p"])
        assert args.key_size == 64
        assert args.out_path == Path("keys/")
        assert args.ndex and args.results and args.progress

    def test_encrypt_requires_input(self):
        """-i is mandatory."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["encrypt"])


class TestKeygenCommand:
    """keygen."""

    def test_keygen_to_path(self, workdir):
        """Writes path and path.pub."""
        assert main(["keygen", "-k", "64", "-o", str(workdir / "id")]) == 0
        pair = read_key_pair(workdir / "id")
        assert pair.is_valid()
        assert pair.public_key.has_default_exponent()

    def test_keygen_ndex(self, workdir):
        """--ndex writes a non default exponent key."""
        assert main(["keygen", "-k", "64", "-n", "-o", str(workdir)]) == 0
        assert read_key_pair(workdir).is_valid()
        assert (workdir / "rrsa_key.pub").read_text().startswith("rrsa")

    def test_keygen_default_location(self, rrsa_home):
        """Without -o the keys go to the rrsa home directory."""
        assert main(["keygen", "-k", "64"]) == 0
        assert (rrsa_home / "rrsa_key").is_file()
        assert (rrsa_home / "rrsa_key.pub").is_file()

    def test_keygen_progress(self, workdir, capsys):
        """-p prints generation progress."""
        main(["keygen", "-k", "64", "-p", "-o", str(workdir)])
        assert "Key Pair successfully generated" in capsys.readouterr().out

    def test_keygen_bad_size(self, workdir, capsys):
        """Unsupported sizes exit with status 1."""
        assert main(["keygen", "-k", "31", "-o", str(workdir)]) == 1
        assert "Key size not supported: 31" in capsys.readouterr().err
        assert not (workdir / "rrsa_key").exists()


class TestValidateCommand:
    """validate."""

    def test_valid_pair(self, workdir, capsys):
        """Both keys given and related."""
        main(["keygen", "-k", "64", "-o", str(workdir / "id")])
        code = main(["validate", "-p", str(workdir / "id.pub"), "-k", str(workdir / "id")])
        assert code == 0
        assert "Key Pair is valid!" in capsys.readouterr().out

    def test_unrelated_pair(self, workdir, capsys):
        """Keys from different generations."""
        main(["keygen", "-k", "64", "-o", str(workdir / "a")])
        main(["keygen", "-k", "64", "-o", str(workdir / "b")])
        code = main(["validate", "-p", str(workdir / "a.pub"), "-k", str(workdir / "b")])
        assert code == 1
        assert "not valid" in capsys.readouterr().err

    def test_public_only(self, workdir, capsys):
        """Only a public key."""
        main(["keygen", "-k", "64", "-o", str(workdir / "id")])
        assert main(["validate", "-p", str(workdir / "id.pub")]) == 0
        assert "Public Key is valid!" in capsys.readouterr().out

    def test_private_only(self, workdir, capsys):
        """Only a private key."""
        main(["keygen", "-k", "64", "-o", str(workdir / "id")])
        assert main(["validate", "-k", str(workdir / "id")]) == 0
        assert "Private Key is valid!" in capsys.readouterr().out

    def test_public_key_given_as_private(self, workdir, capsys):
        """Variant mismatch is reported."""
        main(["keygen", "-k", "64", "-o", str(workdir / "id")])
        assert main(["validate", "-k", str(workdir / "id.pub")]) == 1
        assert "Expected a private key" in capsys.readouterr().err

    def test_malformed_key(self, workdir, capsys):
        """Malformed key text is reported."""
        (workdir / "bad.pub").write_text("rrsa 12xz\n")
        assert main(["validate", "-p", str(workdir / "bad.pub")]) == 1
        assert "not a properly formatted key" in capsys.readouterr().err

    def test_zero_modulus_key(self, workdir, capsys):
        """A key with modulus 0 is an error, not a crash."""
        (workdir / "zero.pub").write_text("rrsa 0\n")
        assert main(["validate", "-p", str(workdir / "zero.pub")]) == 1
        assert "modulus was zero" in capsys.readouterr().err

    def test_no_keys_given(self, capsys):
        """At least one key is needed."""
        assert main(["validate"]) == 1
        assert "error:" in capsys.readouterr().err


class TestEncryptDecryptCommands:
    """encrypt / decrypt."""

    def test_round_trip(self, workdir):
        """Encrypt with the public key, decrypt with the private key."""
        main(["keygen", "-k", "128", "-o", str(workdir / "id")])
        (workdir / "message.txt").write_bytes(MESSAGE)

        assert main(["encrypt", "-i", str(workdir / "message.txt"),
                     "-o", str(workdir / "message.cypher"),
                     "-k", str(workdir / "id.pub")]) == 0
        assert (workdir / "message.cypher").read_bytes() != MESSAGE

        assert main(["decrypt", "-i", str(workdir / "message.cypher"),
                     "-o", str(workdir / "message.out"),
                     "-k", str(workdir / "id")]) == 0
        assert (workdir / "message.out").read_bytes() == MESSAGE

    def test_round_trip_with_defaults(self, workdir, rrsa_home, monkeypatch):
        """Default key directory and default output names."""
        monkeypatch.chdir(workdir)
        main(["keygen", "-k", "128"])
        (workdir / "message.txt").write_bytes(MESSAGE)

        assert main(["encrypt", "-i", "message.txt"]) == 0
        assert (workdir / "encrypted.cypher").is_file()
        assert main(["decrypt", "-i", "encrypted.cypher"]) == 0
        assert (workdir / "decrypted.message").read_bytes() == MESSAGE

    def test_key_directory(self, workdir):
        """A directory key path picks the key by variant."""
        keys = workdir / "keys"
        keys.mkdir()
        main(["keygen", "-k", "128", "-o", str(keys)])
        (workdir / "message.txt").write_bytes(MESSAGE)

        main(["encrypt", "-i", str(workdir / "message.txt"), "-o", str(workdir), "-k", str(keys)])
        main(["decrypt", "-i", str(workdir / "encrypted.cypher"), "-o", str(workdir), "-k", str(keys)])
        assert (workdir / "decrypted.message").read_bytes() == MESSAGE
        assert read_key(keys).is_private()

    def test_encrypt_with_private_key(self, workdir, capsys):
        """Encrypting with a private key fails."""
        main(["keygen", "-k", "64", "-o", str(workdir / "id")])
        (workdir / "message.txt").write_bytes(MESSAGE)
        code = main(["encrypt", "-i", str(workdir / "message.txt"),
                     "-o", str(workdir / "out"), "-k", str(workdir / "id")])
        assert code == 1
        assert "Expected a public key" in capsys.readouterr().err

    def test_missing_input(self, workdir, capsys):
        """Nonexistent input file."""
        main(["keygen", "-k", "64", "-o", str(workdir / "id")])
        code = main(["encrypt", "-i", str(workdir / "nope.txt"),
                     "-o", str(workdir / "out"), "-k", str(workdir / "id.pub")])
        assert code == 1
        assert "error:" in capsys.readouterr().err

    def test_missing_key(self, workdir, capsys):
        """Nonexistent key file."""
        (workdir / "message.txt").write_bytes(MESSAGE)
        code = main(["encrypt", "-i", str(workdir / "message.txt"),
                     "-k", str(workdir / "nope.pub")])
        assert code == 1
        assert "Key file not found" in capsys.readouterr().err
