"""Published scrypt test vectors (RFC 7914)."""

# RFC 7914 section 12: (passphrase, salt, N, r, p, derived key hex)
RFC7914_VECTORS = [
    (
        b"", b"", 16, 1, 1,
        "77d6576238657b203b19ca42c18a0497f16b4844e3074ae8dfdffa3fede21442"
        "fcd0069ded0948f8326a753a0fc81f17e8d3e0fb2e0d3628cf35e20c38d18906",
    ),
    (
        b"password", b"NaCl", 1024, 8, 16,
        "fdbabe1c9d3472007856e7190d01e9fe7c6ad7cbc8237830e77376634b373162"
        "2eaf30d92e22a3886ff109279d9830dac727afb94a83ee6d8360cbdfa2cc0640",
    ),
    (
        b"pleaseletmein", b"SodiumChloride", 16384, 8, 1,
        "7023bdcb3afd7348461c06cd81fd38ebfda8fbba904f8e3ea9b543f6545da1f2"
        "d5432955613f0fcf62d49705242a9af9e61e85dc0d651e40dfcf017b45575887",
    ),
    (
        b"pleaseletmein", b"SodiumChloride", 1048576, 8, 1,
        "2101cb9b6a511aaeaddbbe09cf70f881ec568d574a2ffd4dabe5ee9820adaa47"
        "8e56fd8f4ba5d09ffa1c6d927c40f4c337304049e8a952fbcbf45c6fa77a41a4",
    ),
]

# RFC 7914 section 8: Salsa20/8 core
SALSA20_8_INPUT = bytes.fromhex(
    "7e879a214f3ec9867ca940e641718f26"
    "baee555b8c61c1b50df846116dcd3b1d"
    "ee24f319df9b3d8514121e4b5ac5aa32"
    "76021d2909c74829edebc68db8b8c25e"
)
SALSA20_8_OUTPUT = bytes.fromhex(
    "a41f859c6608cc993b81cacb020cef05"
    "044b2181a2fd337dfd7b1c6396682f29"
    "b4393168e3c9e6bcfe6bc5b7a06d96ba"
    "e424cc102c91745c24ad673dc7618f81"
)

# RFC 7914 section 9: BlockMix input, r=1
BLOCK_MIX_INPUT = bytes.fromhex(
    "f7ce0b653d2d72a4108cf5abe912ffdd"
    "777616dbbb27a70e8204f3ae2d0f6fad"
    "89f68f4811d1e87bcc3bd7400a9ffd29"
    "094f0184639574f39ae5a1315217bcd7"
    "894991447213bb226c25b54da86370fb"
    "cd984380374666bb8ffcb5bf40c254b0"
    "67d27c51ce4ad5fed829c90b505a571b"
    "7f4d1cad6a523cda770e67bceaaf7e89"
)

# RFC 7914 section 11: PBKDF2-HMAC-SHA256, P="passwd", S="salt", c=1
PBKDF2_PASSWD_SALT_64 = bytes.fromhex(
    "55ac046e56e3089fec1691c22544b605"
    "f94185216dde0465e68b9d57c20dacbc"
    "49ca9cccf179b645991664b39d77ef31"
    "7c71b845b1e30bd509112041d3a19783"
)
