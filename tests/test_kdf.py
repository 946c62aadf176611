"""Tests for scrypt key derivation."""

import hashlib
from array import array

import pytest

import scryptkdf.kdf as kdf
from scryptkdf import ScryptParameterError, ScryptParams, derive_key, derive_key_into, derive_key_with_params
from scryptkdf.kdf import pbkdf2_sha256
from vectors import PBKDF2_PASSWD_SALT_64, RFC7914_VECTORS

HAS_HASHLIB_SCRYPT = hasattr(hashlib, "scrypt")


@pytest.mark.parametrize("passphrase,salt,n,r,p,expected", RFC7914_VECTORS[:3])
def test_rfc7914_vectors(passphrase, salt, n, r, p, expected):
    """Known-answer tests from RFC 7914 section 12."""
    assert derive_key(passphrase, salt, n, r, p, dklen=64).hex() == expected


@pytest.mark.slow
def test_rfc7914_vector_n_2_20():
    """The 1 GiB vector; takes minutes in pure Python."""
    passphrase, salt, n, r, p, expected = RFC7914_VECTORS[3]
    assert derive_key(passphrase, salt, n, r, p, dklen=64).hex() == expected


def test_pbkdf2_collaborator_known_answer():
    """RFC 7914 section 11 PBKDF2-HMAC-SHA256 vector (c=1)."""
    assert pbkdf2_sha256(b"passwd", b"salt", 64) == PBKDF2_PASSWD_SALT_64


def test_str_inputs_are_utf8():
    expected = RFC7914_VECTORS[0][5]
    assert derive_key("", "", 16, 1, 1).hex() == expected
    assert derive_key("pässword", "salt", 16, 1, 1) == derive_key("pässword".encode("utf-8"), b"salt", 16, 1, 1)


def test_determinism():
    keys = {derive_key(b"secret", b"salt", 32, 2, 2, dklen=32) for _ in range(3)}
    assert len(keys) == 1


@pytest.mark.parametrize("dklen", [1, 16, 31, 32, 33, 64, 100, 257])
def test_output_length(dklen):
    key = derive_key(b"secret", b"salt", 16, 1, 1, dklen=dklen)
    assert len(key) == dklen
    assert key == derive_key(b"secret", b"salt", 16, 1, 1, dklen=dklen)


def test_inputs_change_output():
    base = derive_key(b"secret", b"salt", 16, 1, 1)
    assert derive_key(b"secret!", b"salt", 16, 1, 1) != base
    assert derive_key(b"secret", b"salt!", 16, 1, 1) != base
    assert derive_key(b"secret", b"salt", 32, 1, 1) != base
    assert derive_key(b"secret", b"salt", 16, 2, 1) != base
    assert derive_key(b"secret", b"salt", 16, 1, 2) != base


def test_derive_key_into_bytearray():
    out = bytearray(64)
    derive_key_into(out, b"", b"", 16, 1, 1)
    assert out.hex() == RFC7914_VECTORS[0][5]


def test_derive_key_into_memoryview_slice():
    backing = bytearray(b"\xaa" * 80)
    derive_key_into(memoryview(backing)[8:40], b"secret", b"salt", 16, 1, 1)
    assert backing[:8] == b"\xaa" * 8
    assert backing[40:] == b"\xaa" * 40
    assert bytes(backing[8:40]) == derive_key(b"secret", b"salt", 16, 1, 1, dklen=32)


def test_derive_key_into_array_buffer():
    """Any writable buffer works; the key length is its byte size."""
    out = array("I", [0] * 8)
    derive_key_into(out, b"secret", b"salt", 16, 1, 1)
    assert out.tobytes() == derive_key(b"secret", b"salt", 16, 1, 1, dklen=32)


def test_derive_key_into_rejects_readonly():
    with pytest.raises(TypeError):
        derive_key_into(bytes(32), b"secret", b"salt", 16, 1, 1)


def test_derive_key_into_untouched_on_failure():
    out = bytearray(b"\x55" * 32)
    with pytest.raises(ScryptParameterError):
        derive_key_into(out, b"secret", b"salt", 3, 1, 1)
    assert out == bytearray(b"\x55" * 32)


def test_derive_key_into_empty_buffer():
    with pytest.raises(ScryptParameterError) as excinfo:
        derive_key_into(bytearray(), b"secret", b"salt", 16, 1, 1)
    assert excinfo.value.name == "dklen"


@pytest.mark.parametrize(
    "dklen,n,r,p",
    [
        (0, 16384, 8, 1),
        (32, 0, 8, 1),
        (32, 3, 8, 1),
        (32, 2097152, 8, 1),
        (32, 16384, 0, 1),
        (32, 16384, 8, 0),
        (32, 16384, 8, 134217728),
    ],
)
def test_invalid_parameters_fail_before_any_work(monkeypatch, dklen, n, r, p):
    """Validation runs before the first PBKDF2 pass or any mixing."""
    calls = []

    def spy(*args, **kwargs):
        calls.append(args)
        raise AssertionError("PBKDF2 must not run for invalid parameters")

    monkeypatch.setattr(kdf, "pbkdf2_sha256", spy)
    monkeypatch.setattr(kdf, "ro_mix", spy)
    with pytest.raises(ScryptParameterError):
        derive_key(bytes(16), bytes(16), n, r, p, dklen=dklen)
    assert calls == []


def test_pipeline_order(monkeypatch):
    """Stretch -> mix each block -> compress with the mixed buffer as salt."""
    calls = []
    real_pbkdf2 = kdf.pbkdf2_sha256
    real_ro_mix = kdf.ro_mix

    def pbkdf2_spy(password, salt, dklen):
        calls.append(("pbkdf2", len(salt), dklen))
        return real_pbkdf2(password, salt, dklen)

    def ro_mix_spy(block, n, r, table=None):
        calls.append(("ro_mix", len(block), n))
        return real_ro_mix(block, n, r, table)

    monkeypatch.setattr(kdf, "pbkdf2_sha256", pbkdf2_spy)
    monkeypatch.setattr(kdf, "ro_mix", ro_mix_spy)

    derive_key(b"pw", b"NaCl", 16, 2, 3, dklen=20)
    assert calls == [
        ("pbkdf2", 4, 3 * 256),
        ("ro_mix", 256, 16),
        ("ro_mix", 256, 16),
        ("ro_mix", 256, 16),
        ("pbkdf2", 3 * 256, 20),
    ]


def test_derive_key_with_params():
    params = ScryptParams(n=16, r=1, p=1, dklen=64)
    assert derive_key_with_params(b"", b"", params).hex() == RFC7914_VECTORS[0][5]


def test_unknown_backend_rejected():
    with pytest.raises(ValueError, match="backend"):
        derive_key(b"pw", b"salt", 16, 1, 1, backend="opencl")


def test_bad_batch_size_rejected():
    with pytest.raises(ValueError, match="batch_size"):
        derive_key(b"pw", b"salt", 16, 1, 1, backend="numpy", batch_size=0)


def test_bad_input_types_rejected():
    with pytest.raises(TypeError):
        derive_key(12345, b"salt", 16, 1, 1)
    with pytest.raises(TypeError):
        derive_key(b"pw", None, 16, 1, 1)


@pytest.mark.skipif(not HAS_HASHLIB_SCRYPT, reason="hashlib.scrypt not available")
@pytest.mark.parametrize("n,r,p,dklen", [(2, 1, 1, 16), (64, 1, 3, 32), (32, 4, 2, 64), (128, 2, 1, 48)])
def test_matches_hashlib_scrypt(rng, n, r, p, dklen):
    password = bytes(rng.getrandbits(8) for _ in range(rng.randint(0, 40)))
    salt = bytes(rng.getrandbits(8) for _ in range(rng.randint(0, 40)))
    expected = hashlib.scrypt(password, salt=salt, n=n, r=r, p=p, dklen=dklen)
    assert derive_key(password, salt, n, r, p, dklen=dklen) == expected
