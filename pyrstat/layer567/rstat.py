"""
Remote kernel statistics (rstat), version 3 (RSTATVERS_TIME).

struct statstime {
	int cp_time[CPUSTATES];
	int dk_xfer[DK_NDRIVE];
	unsigned int v_pgpgin;
	unsigned int v_pgpgout;
	unsigned int v_pswpin;
	unsigned int v_pswpout;
	unsigned int v_intr;
	int if_ipackets;
	int if_ierrors;
	int if_oerrors;
	int if_collisions;
	unsigned int v_swtch;
	int avenrun[3];		scaled by FSCALE
	rstat_timeval boottime;
	rstat_timeval curtime;
	int if_opackets;
};
"""
from datetime import datetime, timedelta, timezone

from pyrstat import pyrstat, psocket
from pyrstat.errors import ShortResponse
from pyrstat.layer567 import pmap

RSTAT_PROG		= 100001
RSTAT_VERS		= 3
RSTATPROC_STATS		= 1

FSCALE			= 256
# verifier flavor, verifier length, accept status
REPLY_HEADER_LEN	= 12
STATSTIME_LEN		= 104
STATS_PAYLOAD_LEN_MIN	= REPLY_HEADER_LEN + STATSTIME_LEN


def timeval_to_datetime(sec, usec):
	"""
	return -- UTC datetime for seconds and microseconds since the epoch
	"""
	return datetime.fromtimestamp(sec, tz=timezone.utc) + timedelta(microseconds=usec)


class Statstime(pyrstat.Packet):
	# order is given by the daemon, if_opackets comes last
	__hdr__ = (
		("cpu_user", "I", 0),
		("cpu_nice", "I", 0),
		("cpu_sys", "I", 0),
		("cpu_idle", "I", 0),
		("dk_xfer0", "I", 0),
		("dk_xfer1", "I", 0),
		("dk_xfer2", "I", 0),
		("dk_xfer3", "I", 0),
		("pgpgin", "I", 0),
		("pgpgout", "I", 0),
		("pswpin", "I", 0),
		("pswpout", "I", 0),
		("intr", "I", 0),
		("ipackets", "I", 0),
		("ierrors", "I", 0),
		("oerrors", "I", 0),
		("collisions", "I", 0),
		("swtch", "I", 0),
		("avenrun0", "I", 0),
		("avenrun1", "I", 0),
		("avenrun2", "I", 0),
		("boottime_sec", "I", 0),
		("boottime_usec", "I", 0),
		("curtime_sec", "I", 0),
		("curtime_usec", "I", 0),
		("opackets", "I", 0)
	)

	__hdr_sub__ = (
		("cp_time",
			lambda obj: (obj.cpu_user, obj.cpu_nice, obj.cpu_sys, obj.cpu_idle)
		),
		("dk_xfer",
			lambda obj: (obj.dk_xfer0, obj.dk_xfer1, obj.dk_xfer2, obj.dk_xfer3)
		),
		# run queue length, fixed point values get truncated
		("avenrun",
			lambda obj: (obj.avenrun0 // FSCALE, obj.avenrun1 // FSCALE, obj.avenrun2 // FSCALE)
		),
		("boottime",
			lambda obj: timeval_to_datetime(obj.boottime_sec, obj.boottime_usec)
		),
		("curtime",
			lambda obj: timeval_to_datetime(obj.curtime_sec, obj.curtime_usec)
		)
	)


def decode(payload):
	"""
	Decode the payload of a RSTATPROC_STATS reply.

	payload -- bytes following the RPC reply envelope
	return -- fully unpacked Statstime
	"""
	if len(payload) < STATS_PAYLOAD_LEN_MIN:
		raise ShortResponse("rstatd: bad response length from daemon. expected at least %d bytes, got %d" %
			(STATS_PAYLOAD_LEN_MIN, len(payload)))

	stats = Statstime(payload[REPLY_HEADER_LEN:])
	stats.dissect_full()
	return stats


def rstatd_port(host=psocket.ADDR_ANY, port=pmap.PMAP_PORT, timeout=None, rnd=None):
	"""
	Ask rpcbind which UDP port the rstat daemon is listening on.
	"""
	return pmap.get_port(RSTAT_PROG, RSTAT_VERS, pmap.IPPROTO_UDP, host=host, port=port,
		timeout=timeout, rnd=rnd)
