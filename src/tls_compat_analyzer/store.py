from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, Mapping, Protocol

from cryptography import x509
from cryptography.hazmat.primitives.serialization import pkcs12

from .loader import subject_from_x509
from .models import CertificateSubject

logger = logging.getLogger(__name__)


PEM_SUFFIXES = (".pem", ".crt", ".cer", ".der")
PKCS12_SUFFIXES = (".p12", ".pfx")


class StoreError(Exception):
    """
    The credential store could not be opened or read.
    """


class CredentialStore(Protocol):
    def names(self) -> Iterable[str]: ...

    def get(self, name: str) -> CertificateSubject | None: ...


class InMemoryStore:
    def __init__(self, entries: Mapping[str, CertificateSubject] | None = None) -> None:
        self._entries = dict(entries or {})

    def names(self) -> Iterator[str]:
        return iter(list(self._entries))

    def get(self, name: str) -> CertificateSubject | None:
        return self._entries.get(name)


class _X509Store:
    """
    Base for stores holding parsed x509 certificates keyed by alias.
    """

    def __init__(self) -> None:
        self._certs: dict[str, x509.Certificate] = {}

    def _add(self, alias: str, cert: x509.Certificate) -> None:
        base, n = alias, 1
        while alias in self._certs:
            n += 1
            alias = f"{base}#{n}"
        self._certs[alias] = cert

    def names(self) -> Iterator[str]:
        return iter(list(self._certs))

    def get(self, name: str) -> CertificateSubject | None:
        cert = self._certs.get(name)
        if cert is None:
            return None
        return subject_from_x509(name, cert)


def _parse_certificates(data: bytes) -> list[x509.Certificate]:
    if b"-----BEGIN" in data:
        return x509.load_pem_x509_certificates(data)
    return [x509.load_der_x509_certificate(data)]


class PemStore(_X509Store):
    """
    Certificates from a PEM/DER file, or from every certificate file of a
    directory. A bundle of several certificates yields aliases "<stem>#<n>".
    """

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)
        if self.path.is_dir():
            files = sorted(p for p in self.path.iterdir() if p.suffix.lower() in PEM_SUFFIXES)
            for p in files:
                try:
                    self._load_file(p)
                except StoreError as e:
                    logger.warning(f"skipping {p.name}: {e}")
        elif self.path.is_file():
            self._load_file(self.path)
        else:
            raise StoreError(f"no such file or directory: {self.path}")
        logger.info(f"opened {self.path} with {len(self._certs)} certificate(s)")

    def _load_file(self, p: Path) -> None:
        try:
            certs = _parse_certificates(p.read_bytes())
        except (OSError, ValueError) as e:
            raise StoreError(f"cannot read certificates from {p}: {e}") from e
        if len(certs) == 1:
            self._add(p.stem, certs[0])
            return
        for i, cert in enumerate(certs, start=1):
            self._add(f"{p.stem}#{i}", cert)


class Pkcs12Store(_X509Store):
    """
    PKCS#12 keystore. Entries are named by their friendly name, or
    "cert-<n>" when the bag carries none.
    """

    def __init__(self, path: str | Path, password: str | None = None) -> None:
        super().__init__()
        self.path = Path(path)
        secret = password.encode("utf-8") if password else None
        try:
            bundle = pkcs12.load_pkcs12(self.path.read_bytes(), secret)
        except (OSError, ValueError) as e:
            raise StoreError(f"cannot open keystore {self.path}: {e}") from e

        entries = ([bundle.cert] if bundle.cert is not None else []) + list(bundle.additional_certs)
        for i, entry in enumerate(entries, start=1):
            alias = entry.friendly_name.decode("utf-8", "replace") if entry.friendly_name else f"cert-{i}"
            self._add(alias, entry.certificate)
        logger.info(f"opened keystore {self.path} with {len(self._certs)} certificate(s)")


def open_store(path: str | Path, password: str | None = None) -> _X509Store:
    p = Path(path)
    if p.suffix.lower() in PKCS12_SUFFIXES:
        return Pkcs12Store(p, password)
    return PemStore(p)
