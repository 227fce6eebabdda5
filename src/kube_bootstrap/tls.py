"""TLS trust material: a client context that trusts only the cluster CA."""

import logging
import ssl
from pathlib import Path

from .consts import CA_CERT_ALIAS, PEM_CERT_MARKER
from .exceptions import ClientCreationError

logger = logging.getLogger("kube-bootstrap.tls")


def load_ca_certificate(ca_cert_path: str | Path) -> str | bytes:
    """Read a CA certificate in a form accepted by ``load_verify_locations``.

    Args:
        ca_cert_path: Path to a PEM or DER encoded X.509 certificate.

    Returns:
        PEM text (str) or DER bytes.

    Raises:
        ClientCreationError: If the file cannot be read or is empty.
    """
    path = Path(ca_cert_path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ClientCreationError(
            f"Cannot read ca cert file: {path}",
            errors=[str(e)],
            suggestions=["Check that the CA certificate is mounted and readable"],
            context={"ca_cert_path": str(path)},
        ) from e

    if not data.strip():
        raise ClientCreationError(
            f"CA cert file is empty: {path}",
            context={"ca_cert_path": str(path)},
        )

    if PEM_CERT_MARKER not in data:
        return data

    try:
        return data.decode("ascii")
    except UnicodeDecodeError as e:
        raise ClientCreationError(
            f"CA cert file is not valid PEM: {path}",
            errors=[str(e)],
            context={"ca_cert_path": str(path)},
        ) from e


def create_ssl_context(ca_cert_path: str | Path) -> ssl.SSLContext:
    """Create a server-authenticating TLS context for the given CA.

    The context starts with an empty trust store, so only the cluster CA is
    trusted. Hostnames are checked against the server certificate (RFC 2818
    rules) and no client certificate is presented.

    Args:
        ca_cert_path: Path to a PEM or DER encoded X.509 certificate.

    Returns:
        Configured ssl.SSLContext.

    Raises:
        ClientCreationError: If the certificate cannot be read or is rejected
            by the TLS library.
    """
    cadata = load_ca_certificate(ca_cert_path)

    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    context.verify_mode = ssl.CERT_REQUIRED
    context.check_hostname = True

    try:
        context.load_verify_locations(cadata=cadata)
    except (ssl.SSLError, ValueError) as e:
        raise ClientCreationError(
            f"Invalid CA certificate: {ca_cert_path}",
            errors=[str(e)],
            suggestions=["Expected a single PEM or DER encoded X.509 certificate"],
            context={"ca_cert_path": str(ca_cert_path), "alias": CA_CERT_ALIAS},
        ) from e

    logger.debug(f"Trust store loaded with {CA_CERT_ALIAS} from {ca_cert_path}")
    return context
