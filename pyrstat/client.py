"""
rstatd client.

To query a local daemon use read_stats():

	stats = client.read_stats()
	print(stats.cpu_user, stats.cpu_nice, stats.cpu_sys, stats.cpu_idle)

For remote daemons create a Client:

	cli = client.Client(host="10.0.0.1", port=792)
	stats = cli.read_stats()

If the port is left empty the port of the daemon is requested from rpcbind
at port 111.
"""
import logging

from pyrstat import psocket
from pyrstat.errors import RPCError, ConnectError, DaemonRequestError
from pyrstat.layer567 import pmap, rstat

logger = logging.getLogger("pyrstat")


def parse_port(port):
	"""
	port -- None, int or string like "792" or ":792"
	return -- port as int or None if empty
	"""
	if port is None:
		return None
	if isinstance(port, int):
		return port

	port = port.lstrip(":")

	if port == "":
		return None

	try:
		return int(port)
	except ValueError as e:
		raise ConnectError("rstatd: invalid port %r" % port) from e


class Client(object):
	"""
	Client for a single rstat daemon. Every call to read_stats() uses a new socket,
	no state is kept between calls.
	"""

	def __init__(self, host="", port=None, timeout=None, rnd=None, pmap_host=psocket.ADDR_ANY,
		pmap_port=pmap.PMAP_PORT):
		"""
		host -- hostname of the rstat daemon, empty string means 0.0.0.0
		port -- port of the daemon, if empty the port is requested from rpcbind
		timeout -- receive timeout in seconds for every transaction, None blocks
		rnd -- random generator for transaction ids, see psocket.UDPHndl
		pmap_host, pmap_port -- address of rpcbind
		"""
		self.host = host
		self.port = port
		self.timeout = timeout
		self.rnd = rnd
		self.pmap_host = pmap_host
		self.pmap_port = pmap_port

	def __repr__(self):
		return "Client(host=%r, port=%r)" % (self.host, self.port)

	def read_stats(self):
		"""
		Read the stats from the daemon.

		return -- rstat.Statstime
		"""
		port = parse_port(self.port)

		if port is None:
			port = rstat.rstatd_port(host=self.pmap_host, port=self.pmap_port,
				timeout=self.timeout, rnd=self.rnd)

		try:
			payload = psocket.call(self.host, port, rstat.RSTAT_PROG, rstat.RSTAT_VERS,
				rstat.RSTATPROC_STATS, timeout=self.timeout, rnd=self.rnd)
		except RPCError as e:
			raise DaemonRequestError("rstatd: daemon request failed: %s" % e) from e

		logger.debug("got %d bytes of stats from %s:%d", len(payload), self.host or psocket.ADDR_ANY, port)
		return rstat.decode(payload)


def default_client():
	"""
	return -- new Client for the local daemon using rpcbind to find the port
	"""
	return Client()


def read_stats():
	"""
	return -- stats of the local daemon
	"""
	return default_client().read_stats()
