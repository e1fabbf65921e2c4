"""TLS cipher suite and protocol version names and their numeric IDs."""

from __future__ import annotations

from collections.abc import Iterable

_SECURE_CIPHERS: dict[str, int] = {
    "TLS_AES_128_GCM_SHA256": 0x1301,
    "TLS_AES_256_GCM_SHA384": 0x1302,
    "TLS_CHACHA20_POLY1305_SHA256": 0x1303,
    "TLS_RSA_WITH_AES_128_CBC_SHA": 0x002F,
    "TLS_RSA_WITH_AES_256_CBC_SHA": 0x0035,
    "TLS_RSA_WITH_AES_128_GCM_SHA256": 0x009C,
    "TLS_RSA_WITH_AES_256_GCM_SHA384": 0x009D,
    "TLS_ECDHE_ECDSA_WITH_AES_128_CBC_SHA": 0xC009,
    "TLS_ECDHE_ECDSA_WITH_AES_256_CBC_SHA": 0xC00A,
    "TLS_ECDHE_RSA_WITH_AES_128_CBC_SHA": 0xC013,
    "TLS_ECDHE_RSA_WITH_AES_256_CBC_SHA": 0xC014,
    "TLS_ECDHE_ECDSA_WITH_AES_128_GCM_SHA256": 0xC02B,
    "TLS_ECDHE_ECDSA_WITH_AES_256_GCM_SHA384": 0xC02C,
    "TLS_ECDHE_RSA_WITH_AES_128_GCM_SHA256": 0xC02F,
    "TLS_ECDHE_RSA_WITH_AES_256_GCM_SHA384": 0xC030,
    "TLS_ECDHE_RSA_WITH_CHACHA20_POLY1305_SHA256": 0xCCA8,
    "TLS_ECDHE_ECDSA_WITH_CHACHA20_POLY1305_SHA256": 0xCCA9,
    # legacy names kept for backward compatibility
    "TLS_ECDHE_RSA_WITH_CHACHA20_POLY1305": 0xCCA8,
    "TLS_ECDHE_ECDSA_WITH_CHACHA20_POLY1305": 0xCCA9,
}

_INSECURE_CIPHERS: dict[str, int] = {
    "TLS_RSA_WITH_RC4_128_SHA": 0x0005,
    "TLS_RSA_WITH_3DES_EDE_CBC_SHA": 0x000A,
    "TLS_RSA_WITH_AES_128_CBC_SHA256": 0x003C,
    "TLS_ECDHE_ECDSA_WITH_RC4_128_SHA": 0xC007,
    "TLS_ECDHE_RSA_WITH_RC4_128_SHA": 0xC011,
    "TLS_ECDHE_RSA_WITH_3DES_EDE_CBC_SHA": 0xC012,
    "TLS_ECDHE_ECDSA_WITH_AES_128_CBC_SHA256": 0xC023,
    "TLS_ECDHE_RSA_WITH_AES_128_CBC_SHA256": 0xC027,
}

_VERSIONS: dict[str, int] = {
    "VersionTLS10": 0x0301,
    "VersionTLS11": 0x0302,
    "VersionTLS12": 0x0303,
    "VersionTLS13": 0x0304,
}


def insecure_tls_ciphers() -> dict[str, int]:
    """Return a copy of the cipher suites with known security issues."""
    return dict(_INSECURE_CIPHERS)


def insecure_tls_cipher_names() -> list[str]:
    """Return the sorted names of the insecure cipher suites."""
    return sorted(_INSECURE_CIPHERS)


def preferred_tls_cipher_names() -> list[str]:
    """Return the sorted names of the preferred cipher suites."""
    return sorted(_SECURE_CIPHERS)


def _all_ciphers() -> dict[str, int]:
    return {**_SECURE_CIPHERS, **_INSECURE_CIPHERS}


def tls_cipher_possible_values() -> list[str]:
    """Return the sorted names of every accepted cipher suite."""
    return sorted(_all_ciphers())


def tls_cipher_suites(cipher_names: Iterable[str]) -> list[int]:
    """Map cipher suite names to their IDs, keeping order and duplicates."""
    possible = _all_ciphers()
    result: list[int] = []
    for name in cipher_names:
        try:
            result.append(possible[name])
        except KeyError:
            raise ValueError(
                f"Cipher suite {name} not supported or doesn't exist"
            ) from None
    return result


def tls_possible_versions() -> list[str]:
    """Return the sorted names of accepted TLS versions."""
    return sorted(_VERSIONS)


def tls_version(version_name: str) -> int:
    """Return the TLS version ID for a name; empty means the default."""
    if not version_name:
        return default_tls_version()
    try:
        return _VERSIONS[version_name]
    except KeyError:
        raise ValueError(f'unknown tls version "{version_name}"') from None


def default_tls_version() -> int:
    """Return the default minimum TLS version (TLS 1.2)."""
    return _VERSIONS["VersionTLS12"]