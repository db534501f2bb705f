"""Ports, paths and markers of the Redpanda container."""

KAFKA_API_PORT = "9092/tcp"
ADMIN_API_PORT = "9644/tcp"
SCHEMA_REGISTRY_PORT = "8081/tcp"
INTERNAL_KAFKA_API_PORT = 9093

CONTAINER_USER = "root:root"
ENTRYPOINT_PATH = "/entrypoint-tc.sh"
BOOTSTRAP_CONFIG_PATH = "/etc/redpanda/.bootstrap.yaml"
NODE_CONFIG_PATH = "/etc/redpanda/redpanda.yaml"
SIDE_FILE_MODE = 0o700

REDPANDA_COMMAND = [ENTRYPOINT_PATH, "redpanda", "start", "--mode=dev-container"]

STARTUP_LOG_MARKER = "Successfully started Redpanda!"
HEALTH_OVERVIEW_PATH = "/v1/cluster/health_overview"
USERS_PATH = "/v1/security/users"
SCRAM_SHA_256 = "SCRAM-SHA-256"


def port_number(port: str) -> int:
    """Return the numeric part of a "9092/tcp" style port."""
    return int(port.split("/", 1)[0])


def host_port(host: str, port: int) -> str:
    """Join host and port, bracketing IPv6 literals."""
    if ":" in host and not host.startswith("["):
        host = f"[{host}]"
    return f"{host}:{port}"
