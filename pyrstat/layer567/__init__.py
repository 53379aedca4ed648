"""RPC messages: RPC envelope, portmapper and rstat."""
