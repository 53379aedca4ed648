"""rstat daemon client using ONC RPC over UDP."""

__license__ = 'GPLv2'
__version__ = '1.0'

from pyrstat.pyrstat import Packet
from pyrstat.client import Client, default_client, read_stats
