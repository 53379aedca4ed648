"""Portmap / rpcbind."""
import socket
import logging

from pyrstat import pyrstat, psocket
from pyrstat.errors import RPCError, PortResolveError, PortNotFound, ShortResponse
from pyrstat.structcbs import next_word

logger = logging.getLogger("pyrstat")

PMAP_PROG		= 100000
PMAP_VERS		= 2
PMAP_PORT		= 111
PMAP_PROCGETPORT	= 3

IPPROTO_UDP		= socket.IPPROTO_UDP


class Pmap(pyrstat.Packet):
	"""Mapping of (program, version, protocol) to a port."""
	__hdr__ = (
		("prog", "I", 0),
		("vers", "I", 0),
		("prot", "I", IPPROTO_UDP),
		("port", "I", 0),
	)


def get_port(prog, vers, prot=IPPROTO_UDP, host=psocket.ADDR_ANY, port=PMAP_PORT, timeout=None, rnd=None):
	"""
	Ask rpcbind for the port a service is bound to.

	prog, vers, prot -- program number, version and protocol of the service
	host, port -- address of rpcbind
	timeout, rnd -- see psocket.UDPHndl
	return -- port of the service
	"""
	try:
		resp = psocket.call(host, port, PMAP_PROG, PMAP_VERS, PMAP_PROCGETPORT,
			args=Pmap(prog=prog, vers=vers, prot=prot),
			timeout=timeout, rnd=rnd)
	except RPCError as e:
		raise PortResolveError("rstatd: rpcbind request failed: %s" % e) from e

	# port is the last word of the payload
	try:
		port_found, _ = next_word(resp[-4:])
	except ShortResponse as e:
		raise PortResolveError("rstatd: no response from rpcbind: %s" % e) from e

	if port_found == 0:
		raise PortNotFound("rstatd: no port mapping found for program %d version %d" % (prog, vers))
	logger.debug("rpcbind: program %d version %d is at port %d", prog, vers, port_found)
	return port_found
