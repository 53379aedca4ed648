from struct import Struct

from pyrstat.errors import ShortResponse

unpack_I = Struct(">I").unpack


def stack(*words):
	"""
	Encode words as unsigned 32 bit big endian values.

	return -- bytes of length 4 * len(words)
	"""
	return Struct(">%dI" % len(words)).pack(*words)


def next_word(buf):
	"""
	Consume one unsigned 32 bit big endian word.

	return -- (word, remaining bytes)
	"""
	if len(buf) < 4:
		raise ShortResponse("need 4 bytes to read a word, got %d" % len(buf))
	return unpack_I(buf[:4])[0], buf[4:]


def unstack(buf):
	"""
	Decode all complete words from buf, trailing bytes are ignored.

	return -- list of words
	"""
	return list(Struct(">%dI" % (len(buf) // 4)).unpack(buf[:len(buf) // 4 * 4]))
