import threading

from twisted.python import log

from channel import Channel


class ChannelRegistry:
	"""
	Process-wide map of channel names to Channel instances.

	The registry alone decides whether a channel exists. Callers holding
	C{lock} may create a channel with L{getOrCreate} and must L{remove} it
	within the same locked step that left it without members.
	"""

	def __init__(self):
		self.lock = threading.RLock()
		self._channels = {}

	def find(self, name):
		return self._channels.get(name)

	def getOrCreate(self, name):
		with self.lock:
			channel = self._channels.get(name)
			if channel is None:
				channel = Channel(name)
				self._channels[name] = channel
				log.msg("Channel {} created".format(name))
			return channel

	def remove(self, name):
		with self.lock:
			if self._channels.pop(name, None) is not None:
				log.msg("Channel {} removed (empty)".format(name))

	def channelsOf(self, client):
		with self.lock:
			return [channel for channel in self._channels.values()
				if channel.hasMember(client)]

	def names(self):
		with self.lock:
			return list(self._channels)

	def __contains__(self, name):
		return name in self._channels

	def __len__(self):
		return len(self._channels)
