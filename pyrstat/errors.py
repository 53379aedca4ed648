"""
Errors raised on the way from a stat request to the decoded reply.

Every error is an RPCError. Errors wrapped by an upper layer keep the original
error as __cause__.
"""


class RPCError(Exception):
	pass


class ConnectError(RPCError):
	"""Socket could not be created or the address could not be resolved."""
	pass


class SendError(RPCError):
	pass


class ReceiveError(RPCError):
	pass


class ShortResponse(RPCError):
	"""Fewer bytes than needed by the protocol."""
	pass


class TransactionMismatch(RPCError):
	pass


class InvalidReply(RPCError):
	"""Reply is not an accepted message."""
	pass


class RemoteProcedureFailure(RPCError):
	pass


class PortResolveError(RPCError):
	"""Port lookup via rpcbind failed."""
	pass


class PortNotFound(PortResolveError):
	pass


class DaemonRequestError(RPCError):
	"""Stat request to the daemon failed."""
	pass
