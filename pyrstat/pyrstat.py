"""
RPC message creation and parsing.
"""
import logging
import re
import struct

from pyrstat.pyrstat_meta import MetaPacket
from pyrstat.errors import ShortResponse

logger = logging.getLogger("pyrstat")
# logger.setLevel(logging.DEBUG)
logger.setLevel(logging.WARNING)

logger_streamhandler = logging.StreamHandler()
logger_formatter = logging.Formatter("%(levelname)s (%(funcName)s): %(message)s")
logger_streamhandler.setFormatter(logger_formatter)

logger.addHandler(logger_streamhandler)

PROG_VISIBLE_CHARS	= re.compile(b"[^\x20-\x7e]")

ERROR_NOT_UNPACKED	= 4


class Packet(object, metaclass=MetaPacket):
	"""
	Base class of all RPC messages. Header fields are generated from __hdr__:

		("xid", "I", 0)	-> field "xid", unsigned 32 bit, default 0

	Fields are packed in order of definition using network byte order (XDR).
	A message is created from bytes or keywords:

		RPCReply(b"...")		header is unpacked on first field access
		RPCCall(xid=1, prog=100001)	unset fields keep their defaults

	The body is either raw bytes or an upper layer message. Upper layers are added
	via "+" and can be accessed by their lowercase class name:

		call = RPCCall(prog=100000) + Pmap(prog=100001)
		call.pmap.prog
	"""

	def __init__(self, *args, **kwargs):
		"""
		bytestring -- bytes to build the message from, header values are unpacked lazily
		keywords -- header fields to be set
		"""
		if args:
			# fewer bytes than the header needs: fails on first field access
			self._header_cached = args[0][:self._header_len]
			self._body_bytes = args[0][self._header_len:]
			self._unpacked = False
		else:
			for k, v in kwargs.items():
				setattr(self, k, v)
			self._unpacked = True

	def __len__(self):
		"""Return total length of header and all upper layers in bytes."""
		return self._header_len + len(self.body_bytes)

	errors = property(lambda obj: obj._errors)

	def _get_bodybytes(self):
		"""
		return -- raw body bytes or bytes of all upper layers
		"""
		if self._bodytypename is not None:
			return self._get_bodyhandler().bin()
		return self._body_bytes

	def _set_bodybytes(self, value):
		"""
		Set raw body bytes, an upper layer gets removed.
		"""
		if self._bodytypename is not None:
			self._set_bodyhandler(None)
		self._body_bytes = value

	body_bytes = property(_get_bodybytes, _set_bodybytes)

	def _get_bodyhandler(self):
		if self._bodytypename is not None:
			return self.__getattribute__(self._bodytypename)
		return None

	def _set_bodyhandler(self, hndl):
		"""
		hndl -- upper layer message, None removes the upper layer and leaves an empty body
		"""
		if self._bodytypename is not None:
			self.__getattribute__(self._bodytypename)._lower_layer = None

		if hndl is None:
			self._bodytypename = None
			self._body_bytes = b""
		else:
			self._bodytypename = hndl.__class__.__name__.lower()
			self._body_bytes = None
			hndl._lower_layer = self
			setattr(self, self._bodytypename, hndl)

	upper_layer = property(_get_bodyhandler, _set_bodyhandler)
	lower_layer = property(lambda v: v._lower_layer)

	def _highest_layer(self):
		current = self

		while current.upper_layer is not None:
			current = current.upper_layer

		return current

	highest_layer = property(_highest_layer)

	def __getattr__(self, varname):
		"""
		Only called for names which are neither fields nor upper layers.
		"""
		raise AttributeError("Can't find Attribute '%s' in %r, body type: %s" %
			(varname, self.__class__, self._bodytypename))

	def __getitem__(self, packet_type):
		"""
		packet_type -- message class to search for, starting at this layer
		return -- first layer of type packet_type or None
		"""
		p_instance = self

		while p_instance is not None and type(p_instance) is not packet_type:
			p_instance = p_instance._get_bodyhandler()

		return p_instance

	def __iter__(self):
		"""Iterate over this and all upper layers."""
		p_instance = self

		while p_instance is not None:
			yield p_instance
			p_instance = p_instance._get_bodyhandler()

	def dissect_full(self):
		"""
		Unpack the header values of this and all upper layers.
		"""
		for p_instance in self:
			if not p_instance._unpacked:
				p_instance._unpack()

	def __add__(self, packet_to_add):
		"""
		RPCCall() + Pmap() -> Pmap becomes the highest layer
		"""
		self.highest_layer.upper_layer = packet_to_add
		return self

	def __iadd__(self, packet_to_add):
		self.highest_layer.upper_layer = packet_to_add
		return self

	def _summarize(self, verbose=False):
		"""
		verbose -- include all upper layers if True
		"""
		fields = []

		for name in self._header_field_names:
			val = getattr(self, name[1:])

			if type(val) is int:
				fields.append("%s=%X" % (name[1:], val))
			else:
				fields.append("%s=%r" % (name[1:], val))

		if self._bodytypename is None:
			fields.append("bytes=%r" % self._body_bytes)
		else:
			fields.append("handler=%s" % self._bodytypename)
		layer_sums = ["%s(%s)" % (self.__class__.__name__, ", ".join(fields))]

		if verbose and self._bodytypename is not None:
			layer_sums.append("%r" % self._get_bodyhandler())

		return "\n".join(layer_sums)

	def __str__(self):
		return self._summarize()

	def __repr__(self):
		return self._summarize(verbose=True)

	def _unpack(self):
		"""
		Set all header values from the cached header bytes.
		"""
		# set first: field access below must not unpack again
		self._unpacked = True

		try:
			header_unpacked = self._header_format.unpack(self._header_cached)
		except struct.error:
			self._errors |= ERROR_NOT_UNPACKED
			raise ShortResponse("could not unpack %s: expected %d bytes, got %d" %
				(self.__class__.__name__, self._header_format.size, len(self._header_cached)))

		for name, value in zip(self._header_field_names, header_unpacked):
			object.__setattr__(self, name, value)

	def bin(self):
		"""
		return -- header and body including all upper layers as bytes
		"""
		return self._pack_header() + self.body_bytes

	def _pack_header(self):
		if not self._header_changed:
			return self._header_cached

		header_values = [self.__getattribute__(name) for name in self._header_field_names]

		try:
			self._header_cached = self._header_format.pack(*header_values)
		except struct.error as e:
			logger.warning("could not pack header of %s, value out of range? %r", self.__class__.__name__, e)
			raise
		self._header_changed = False

		return self._header_cached

	def hexdump(self, length=16):
		"""
		return -- hexdump of header and body
		"""
		return hexdump(self.bin(), length=length)


def hexdump(buf, length=16):
	"""
	buf -- bytes to be dumped
	length -- amount of bytes per line

	return -- hexdump output string
	"""
	bytepos = 0
	res = []

	while bytepos < len(buf):
		line = buf[bytepos: bytepos + length]
		hexa = " ".join(["%02x" % x for x in line])
		line = re.sub(PROG_VISIBLE_CHARS, b".", line)
		res.append("  %04d:      %-*s %s" % (bytepos, length * 3, hexa, line))
		bytepos += length
	return "\n".join(res)
