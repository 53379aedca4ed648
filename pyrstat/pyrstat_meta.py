import struct
import logging

logger = logging.getLogger("pyrstat")


def get_setter(varname):
	"""
	varname -- header field name
	return -- setter writing _varname, header bytes get repacked on next bin()
	"""
	varname_shadowed = "_%s" % varname

	def setfield(obj, value):
		# unpack first: a later unpack would overwrite this value
		if obj._unpacked is False:
			obj._unpack()
		object.__setattr__(obj, varname_shadowed, value)
		obj._header_changed = True

	return setfield


def get_getter(varname):
	"""
	varname -- header field name
	return -- getter reading _varname, unpacks cached header bytes if needed
	"""
	varname_shadowed = "_%s" % varname

	def getfield(obj):
		if obj._unpacked is False:
			obj._unpack()
		return obj.__getattribute__(varname_shadowed)

	return getfield


def configure_packet_header(t, hdrs, header_fmt):
	if hdrs is None:
		return

	for hdr in hdrs:
		if len(hdr) != 3:
			logger.warning("field definition of %s needs (name, format, default), got %d values", hdr[0], len(hdr))

		shadowed_name = "_%s" % hdr[0]
		t._header_field_names.append(shadowed_name)
		header_fmt.append(hdr[1])
		t._header_cached.append(hdr[2])

		# class level default, instances shadow it on first set
		setattr(t, shadowed_name, hdr[2])
		setattr(t, hdr[0], property(get_getter(hdr[0]), get_setter(hdr[0])))


def configure_packet_header_sub(t, hdrs_sub):
	if hdrs_sub is None:
		return

	for name, cb_get in hdrs_sub:
		setattr(t, name, property(cb_get))


class MetaPacket(type):
	"""
	Builds the wire layout of a message class from its __hdr__ table when the
	class is created. Every entry is (name, struct format, default):

	__hdr__ = (
		("xid", "I", 0),
		("prog", "I", 100000),
	)

	Read-only values computed from header fields are declared in __hdr_sub__:

	__hdr_sub__ = (
		("avenrun", lambda obj: (obj.avenrun0 // 256, ...)),
	)

	Field names share the namespace of methods and must not collide.
	"""
	def __new__(mcs, clsname, clsbases, clsdict):
		t = type.__new__(mcs, clsname, clsbases, clsdict)
		# defaults, packed to the initial header bytes below
		t._header_cached = []
		t._header_field_names = []
		header_fmt = [getattr(t, "__byte_order__", ">")]

		configure_packet_header(t, getattr(t, "__hdr__", None), header_fmt)
		configure_packet_header_sub(t, getattr(t, "__hdr_sub__", None))

		t._header_format = struct.Struct("".join(header_fmt))
		t._header_len = t._header_format.size
		t._header_cached = t._header_format.pack(*t._header_cached)
		# raw body, None while an upper layer is set
		t._body_bytes = b""
		t._bodytypename = None
		t._lower_layer = None
		# True after a field was set, reset by bin()
		t._header_changed = False
		# None: created from keywords, False: header bytes not yet unpacked
		t._unpacked = None
		# ERROR_* flags of pyrstat.py
		t._errors = 0
		return t
