"""RPC transactions using UDP sockets."""
import socket
import random
import logging

from pyrstat.errors import ConnectError, SendError, ReceiveError, ShortResponse
from pyrstat.layer567 import rpc

logger = logging.getLogger("pyrstat")

ADDR_ANY	= "0.0.0.0"
RECV_BUFSIZE	= 2048


class UDPHndl(object):
	"""
	Socket handler for a single RPC transaction: one datagram out, one datagram in.
	Use as context manager to get the socket closed on every path.
	"""

	def __init__(self, host="", port=0, timeout=None, rnd=None, buffersize_recv=RECV_BUFSIZE):
		"""
		Create a datagram socket connected to the given endpoint.

		host -- hostname or address of the server, empty string means ADDR_ANY
		port -- port of the server
		timeout -- receive timeout in seconds, None blocks until a reply arrives
		rnd -- random generator for transaction ids (needs getrandbits()),
			a new SystemRandom instance is used if None
		buffersize_recv -- max amount of bytes read for a reply
		"""
		self.addr = (host or ADDR_ANY, port)
		self._rnd = rnd if rnd is not None else random.SystemRandom()
		self._buffersize_recv = buffersize_recv

		try:
			self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
		except OSError as e:
			raise ConnectError("failed to create socket: %s" % e) from e

		try:
			self._socket.settimeout(timeout)
			self._socket.connect(self.addr)
		# ValueError: negative timeout
		except (OSError, OverflowError, TypeError, ValueError) as e:
			self._socket.close()
			raise ConnectError("failed to connect to %s:%s: %s" % (self.addr[0], self.addr[1], e)) from e
		logger.debug("connected to %s:%d", self.addr[0], self.addr[1])

	def new_xid(self):
		"""
		return -- fresh 32 bit transaction id
		"""
		return self._rnd.getrandbits(32)

	def send(self, bts):
		"""
		Send the given bytes as one datagram.

		bts -- the bytes to be sent
		"""
		try:
			sent = self._socket.send(bts)
		except OSError as e:
			raise SendError("failed to write request: %s" % e) from e

		if sent != len(bts):
			raise SendError("failed to write request: %d of %d bytes sent" % (sent, len(bts)))
		logger.debug("sent %d bytes to %s:%d", sent, self.addr[0], self.addr[1])

	def recv(self):
		"""
		return -- bytes of one datagram received from network
		"""
		try:
			bts = self._socket.recv(self._buffersize_recv)
		except OSError as e:
			# socket.timeout is an OSError
			raise ReceiveError("failed to read response: %s" % e) from e
		logger.debug("received %d bytes from %s:%d", len(bts), self.addr[0], self.addr[1])
		return bts

	def sr(self, packet_send):
		"""
		Send a call and receive the answer. The reply envelope is validated against
		the transaction id of the call.

		packet_send -- RPCCall packet, optionally followed by argument layers
		return -- validated RPCReply, procedure payload as body bytes
		"""
		self.send(packet_send.bin())
		bts = self.recv()

		if len(bts) < 12:
			raise ShortResponse("invalid response length %d" % len(bts))

		reply = rpc.RPCReply(bts)
		logger.debug("reply: %s", reply)
		reply.check(packet_send[rpc.RPCCall].xid)
		return reply

	def call(self, prog, vers, proc, args=None):
		"""
		Call a remote procedure.

		prog, vers, proc -- program, version and procedure number
		args -- procedure arguments as Packet or bytes, None for no arguments
		return -- procedure payload following the 12 byte reply envelope
		"""
		packet = rpc.RPCCall(xid=self.new_xid(), prog=prog, vers=vers, proc=proc)

		if isinstance(args, bytes):
			packet.body_bytes = args
		elif args is not None:
			packet += args
		return self.sr(packet).body_bytes

	def __enter__(self):
		return self

	def __exit__(self, objtype, value, traceback):
		self.close()

	def close(self):
		"""Close the socket."""
		self._socket.close()


def call(host, port, prog, vers, proc, args=None, timeout=None, rnd=None):
	"""
	Do one RPC transaction using a new socket, see UDPHndl.call().
	"""
	with UDPHndl(host=host, port=port, timeout=timeout, rnd=rnd) as hndl:
		return hndl.call(prog, vers, proc, args=args)
