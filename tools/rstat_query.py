"""Query an rstat daemon and print the decoded stats."""
import sys
import logging
import argparse

from pyrstat import client
from pyrstat.errors import RPCError

logger = logging.getLogger("pyrstat")


def print_stats(stats):
	print("cpu (user nice sys idle):     %d %d %d %d" % stats.cp_time)
	print("disk transfers:               %d %d %d %d" % stats.dk_xfer)
	print("pages in/out:                 %d %d" % (stats.pgpgin, stats.pgpgout))
	print("swaps in/out:                 %d %d" % (stats.pswpin, stats.pswpout))
	print("interrupts:                   %d" % stats.intr)
	print("context switches:             %d" % stats.swtch)
	print("packets in/errors:            %d %d" % (stats.ipackets, stats.ierrors))
	print("packets out/errors:           %d %d" % (stats.opackets, stats.oerrors))
	print("collisions:                   %d" % stats.collisions)
	print("run queue (1, 5, 15 min):     %d %d %d" % stats.avenrun)
	print("boot time:                    %s" % stats.boottime.isoformat())
	print("current time:                 %s" % stats.curtime.isoformat())


if __name__ == "__main__":
	parser = argparse.ArgumentParser()
	parser.add_argument("--host", default="")
	parser.add_argument("--port", default=None)  # empty = ask rpcbind
	parser.add_argument("--timeout", type=float, default=None)
	parser.add_argument("-v", "--verbose", action="store_true")
	args = parser.parse_args()

	if args.verbose:
		logger.setLevel(logging.DEBUG)

	cli = client.Client(host=args.host, port=args.port, timeout=args.timeout)

	try:
		stats = cli.read_stats()
	except RPCError as e:
		print("could not read stats from %r: %s" % (cli, e))
		sys.exit(1)
	print_stats(stats)
