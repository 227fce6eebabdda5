"""High-value constants for the kube-bootstrap package."""

# Package metadata
PACKAGE_VERSION = "1.0.0"
PACKAGE_NAME = "kube-bootstrap"
USER_AGENT = f"{PACKAGE_NAME}/{PACKAGE_VERSION}"

# In-cluster contract: service-account mount and service discovery env vars
SERVICEACCOUNT_ROOT = "/var/run/secrets/kubernetes.io/serviceaccount"
SERVICEACCOUNT_CA_PATH = f"{SERVICEACCOUNT_ROOT}/ca.crt"
SERVICEACCOUNT_TOKEN_PATH = f"{SERVICEACCOUNT_ROOT}/token"
ENV_SERVICE_HOST = "KUBERNETES_SERVICE_HOST"
ENV_SERVICE_PORT = "KUBERNETES_SERVICE_PORT"

# Business logic consts
TOKEN_REFRESH_SECONDS = 60  # re-read the token file at most once a minute
CA_CERT_ALIAS = "ca-cert"
PEM_CERT_MARKER = b"-----BEGIN CERTIFICATE-----"

# Kubernetes PATCH content types
MERGE_PATCH = "application/merge-patch+json"
JSON_PATCH = "application/json-patch+json"
STRATEGIC_MERGE_PATCH = "application/strategic-merge-patch+json"
APPLY_PATCH = "application/apply-patch+yaml"
PATCH_CONTENT_TYPES = {
    "merge": MERGE_PATCH,
    "json": JSON_PATCH,
    "strategic": STRATEGIC_MERGE_PATCH,
    "apply": APPLY_PATCH,
}

JSON_CONTENT_TYPE = "application/json"
VERSION_PATH = "/version"
