from twisted.internet.protocol import Factory

from dispatcher import CommandDispatcher
from irc_protocol import IRCProtocol
from registry import ChannelRegistry


class ChatServer(Factory):

	def __init__(self, servername="localhost", userhost="localhost"):
		self.servername = servername
		self.userhost = userhost
		self.users = {} # maps nicknames to Client instances
		self.registry = ChannelRegistry()
		self.dispatcher = CommandDispatcher(self.registry)

	def buildProtocol(self, addr):
		protocol = IRCProtocol(self.users, self.dispatcher, self.servername, self.userhost)
		protocol.factory = self
		return protocol
