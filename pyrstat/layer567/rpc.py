"""
ONC Remote Procedure Call, version 2 (RFC 1057), as carried over UDP.
Only the null authentication flavor is supported.
"""
from pyrstat import pyrstat
from pyrstat.errors import TransactionMismatch, InvalidReply, RemoteProcedureFailure

RPC_VERSION	= 2

# message types
CALL		= 0
REPLY		= 1

# reply status
MSG_ACCEPTED	= 0
MSG_DENIED	= 1

AUTH_NULL	= 0


class RPCCall(pyrstat.Packet):
	__hdr__ = (
		("xid", "I", 0),
		("mtype", "I", CALL),
		("rpcvers", "I", RPC_VERSION),
		("prog", "I", 0),
		("vers", "I", 0),
		("proc", "I", 0),
		("cred_flavor", "I", AUTH_NULL),
		("cred_len", "I", 0),
		("verf_flavor", "I", AUTH_NULL),
		("verf_len", "I", 0)
	)


class RPCReply(pyrstat.Packet):
	"""
	Reply envelope: xid echo, message type and reply status.
	The procedure payload is kept as body bytes.
	"""
	__hdr__ = (
		("xid", "I", 0),
		("mtype", "I", REPLY),
		("stat", "I", MSG_ACCEPTED)
	)

	def check(self, xid):
		"""
		Validate this reply as answer to the call having the given transaction id.
		Checks are done in order: xid, message type, reply status.

		xid -- transaction id of the call
		"""
		if self.xid != xid:
			raise TransactionMismatch("transaction id mismatch from rpc request: sent %08X, got %08X" %
				(xid, self.xid))
		if self.mtype != REPLY:
			raise InvalidReply("invalid response from rpc request: message type %d" % self.mtype)
		if self.stat != MSG_ACCEPTED:
			raise RemoteProcedureFailure("rpc request failed: reply status %d" % self.stat)
