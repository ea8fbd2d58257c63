import re

from twisted.python import log
from twisted.words.protocols import irc
from twisted.words.protocols.irc import IRC, IRCBadMessage

import replies
from client import Client

NICKNAME = re.compile(r"^[A-Za-z\[\]\\`_^{|}][A-Za-z0-9\[\]\\`_^{|}-]{0,29}$")


def nickKey(nickname):
	return nickname.lower() if nickname is not None else None


class IRCProtocol(IRC):

	buffer = b""
	MAX_LENGTH = 512

	def __init__(self, users, dispatcher, servername="localhost", userhost="localhost"):
		self.users = users # maps nicknames to Client instances
		self.dispatcher = dispatcher
		self.hostname = servername
		self.userhost = userhost
		self.client = None

	def sendToClient(self, code, *params, **kw):
		self.client.send(replies.numeric(code, self.client, *params, **kw))

	def parsemsg(self, s):
		prefix = ''
		if not s:
			raise IRCBadMessage("Empty line.")
		args = s.split()
		if args[0].startswith(':'):
			prefix = args.pop(0)[1:]
		if not args:
			raise IRCBadMessage("No command.")
		command = args.pop(0)
		return prefix, command, args

	def connectionMade(self):
		IRC.connectionMade(self)
		self.client = Client(self.transport, host=self.userhost)
		log.msg("Connection from {}".format(self.transport.getPeer()))

	def connectionLost(self, reason):
		self.dispatcher.quit(self.client, ["QUIT", ":Connection closed"])
		key = nickKey(self.client.nickname)
		if self.users.get(key) is self.client:
			del self.users[key]
		log.msg("Lost {}: {}".format(self.client, reason.getErrorMessage()))

	def dataReceived(self, data):
		lines = (self.buffer + data).split(b"\n")
		self.buffer = lines.pop()
		if len(self.buffer) > self.MAX_LENGTH:
			return self.lineLengthExceeded(self.buffer)
		for line in lines:
			if len(line) > self.MAX_LENGTH:
				return self.lineLengthExceeded(line)
			line = line.rstrip(b"\r").decode("utf-8", "replace")
			if line.strip() == "":
				continue
			try:
				prefix, command, params = self.parsemsg(line)
			except IRCBadMessage as e:
				log.msg("Bad message from {}: {}".format(self.client, e))
				continue
			self.handleCommand(command.upper(), prefix, params)

	def lineLengthExceeded(self, line):
		log.msg("Line too long from {} ({} bytes), dropping".format(self.client, len(line)))
		self.buffer = b""
		self.transport.loseConnection()

	def handleCommand(self, command, prefix, params):
		if getattr(self, "irc_" + command, None) is None:
			if self.dispatcher.dispatch(self.client, [command] + params):
				return
		IRC.handleCommand(self, command, prefix, params)

	def irc_unknown(self, prefix, command, params):
		self.sendToClient(irc.ERR_UNKNOWNCOMMAND, command)

	def irc_NICK(self, prefix, params):
		if not params:
			self.sendToClient(irc.ERR_NONICKNAMEGIVEN)
			return
		nickname = params[0].lstrip(':')
		if not NICKNAME.match(nickname):
			self.sendToClient(irc.ERR_ERRONEUSNICKNAME, nickname)
			return
		owner = self.users.get(nickKey(nickname))
		if owner is not None and owner is not self.client:
			self.sendToClient(irc.ERR_NICKNAMEINUSE, nickname)
			return
		if nickname == self.client.nickname:
			return
		old = self.client.nickname
		if self.client.isRegistered():
			self.client.send(replies.message(self.client, "NICK", nickname))
		self.users.pop(nickKey(old), None)
		self.users[nickKey(nickname)] = self.client
		self.client.nickname = nickname
		if old is not None:
			log.msg("Nick change: {} -> {}".format(old, nickname))
		self.checkRegistration()

	def irc_USER(self, prefix, params):
		if self.client.isRegistered():
			self.sendToClient(irc.ERR_ALREADYREGISTRED)
			return
		if len(params) < 4:
			self.sendToClient(irc.ERR_NEEDMOREPARAMS, "USER")
			return
		self.client.username = params[0]
		self.checkRegistration()

	def irc_PING(self, prefix, params):
		token = replies.trailingText(params, 0) or self.hostname
		self.client.send("PONG {} :{}{}".format(self.hostname, token, replies.CRLF))

	def irc_QUIT(self, prefix, params):
		self.dispatcher.quit(self.client, ["QUIT"] + params)
		self.transport.loseConnection()

	def checkRegistration(self):
		client = self.client
		if client.isRegistered() or client.nickname is None or client.username is None:
			return
		client.registered = True
		self.sendToClient(irc.RPL_WELCOME,
			text="Welcome to the Internet Relay Network {}".format(client.prefix()))
		log.msg("Registered {}".format(client.prefix()))
