"""RPC server facade with status reports, request statistics and JSON-RPC error types."""