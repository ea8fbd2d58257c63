import functools

from twisted.python import log
from twisted.words.protocols import irc

import replies

CHANNEL_PREFIXES = "#&"
CHANNEL_NAME_LENGTH = 50


class CommandError(Exception):
	"""A protocol usage error, carrying the numeric line for the issuer."""

	def __init__(self, line):
		Exception.__init__(self, line)
		self.line = line


def isChannelName(name):
	if not name or name[0] not in CHANNEL_PREFIXES or len(name) > CHANNEL_NAME_LENGTH:
		return False
	return not any(c in name for c in " ,\x07")


def command(name, minArgs=1, needsRegistration=True):
	"""
	Wrap a dispatcher command: check registration, then argument count,
	and report any L{CommandError} to the issuing client only.
	"""
	def decorator(f):
		@functools.wraps(f)
		def wrapper(self, client, args):
			try:
				if needsRegistration and not client.isRegistered():
					raise CommandError(replies.numeric(irc.ERR_NOTREGISTERED, client))
				if len(args) < minArgs:
					raise CommandError(replies.numeric(irc.ERR_NEEDMOREPARAMS, client, name))
				f(self, client, args)
			except CommandError as e:
				client.send(e.line)
		return wrapper
	return decorator


class CommandDispatcher:
	"""
	Runs membership commands against a L{ChannelRegistry}.

	Each command validates, snapshots the recipients, mutates membership
	and drops an emptied channel while holding C{registry.lock}. Lines are
	written to the recipients only after the lock is released.
	"""

	def __init__(self, registry):
		self.registry = registry
		self.commands = {
			"JOIN": self.join,
			"PART": self.part,
			"KICK": self.kick,
			"MODE": self.mode,
			"NAMES": self.names,
			"QUIT": self.quit,
		}

	def dispatch(self, client, args):
		handler = self.commands.get(args[0].upper()) if args else None
		if handler is None:
			return False
		handler(client, args)
		return True

	def broadcast(self, targets, line):
		for member in targets:
			member.send(line)

	@command("JOIN", minArgs=2)
	def join(self, client, args):
		name = args[1]
		if not isChannelName(name):
			raise CommandError(replies.numeric(irc.ERR_BADCHANMASK, client, name))
		with self.registry.lock:
			channel = self.registry.getOrCreate(name)
			if channel.hasMember(client):
				return
			channel.addMember(client)
			if len(channel) == 1:
				channel.addOperator(client)
			targets = channel.members()
			names = channel.names()
		self.broadcast(targets, replies.message(client, "JOIN", name))
		self._sendNames(client, name, names)
		log.msg("{} joined {}".format(client.nickname, name))

	@command("PART", minArgs=2)
	def part(self, client, args):
		name = args[1]
		reason = replies.trailingText(args, 2)
		with self.registry.lock:
			channel = self._joinedChannel(client, name)
			targets = channel.members()
			self._removeMember(channel, client)
		self.broadcast(targets, replies.message(client, "PART", name, trailing=reason))
		log.msg("{} left {}".format(client.nickname, name))

	@command("KICK", minArgs=3)
	def kick(self, client, args):
		name, nickname = args[1], args[2]
		reason = replies.trailingText(args, 3) or client.nickname
		with self.registry.lock:
			channel = self._joinedChannel(client, name)
			if not channel.isOperator(client):
				raise CommandError(replies.numeric(irc.ERR_CHANOPRIVSNEEDED, client, name))
			target = channel.findMember(nickname)
			if target is None:
				raise CommandError(
					replies.numeric(irc.ERR_USERNOTINCHANNEL, client, nickname, name))
			if target is client:
				raise CommandError(replies.numeric(
					irc.ERR_CHANOPRIVSNEEDED, client, name, text="You cannot kick yourself"))
			targets = channel.members()
			self._removeMember(channel, target)
		self.broadcast(targets,
			replies.message(client, "KICK", name, target.nickname, trailing=reason))
		log.msg("{} kicked {} from {}".format(client.nickname, target.nickname, name))

	@command("MODE", minArgs=2)
	def mode(self, client, args):
		name = args[1]
		with self.registry.lock:
			channel = self.registry.find(name)
			if channel is None:
				raise CommandError(replies.numeric(irc.ERR_NOSUCHCHANNEL, client, name))
			if len(args) == 2:
				targets, line = [client], replies.numeric(
					irc.RPL_CHANNELMODEIS, client, name, text="+")
			else:
				targets, line = self._changeOperator(client, channel, args)
		self.broadcast(targets, line)

	@command("NAMES", minArgs=2)
	def names(self, client, args):
		name = args[1]
		with self.registry.lock:
			channel = self.registry.find(name)
			names = channel.names() if channel is not None else None
		self._sendNames(client, name, names)

	@command("QUIT", needsRegistration=False)
	def quit(self, client, args):
		reason = replies.trailingText(args, 1) or "Client Quit"
		observers = {}
		with self.registry.lock:
			channels = self.registry.channelsOf(client)
			for channel in channels:
				self._removeMember(channel, client)
				for member in channel.members():
					observers.setdefault(member, None)
		if not channels:
			return
		self.broadcast(list(observers), replies.message(client, "QUIT", trailing=reason))
		log.msg("{} quit ({} channels): {}".format(client.nickname, len(channels), reason))

	def _joinedChannel(self, client, name):
		channel = self.registry.find(name)
		if channel is None:
			raise CommandError(replies.numeric(irc.ERR_NOSUCHCHANNEL, client, name))
		if not channel.hasMember(client):
			raise CommandError(replies.numeric(irc.ERR_NOTONCHANNEL, client, name))
		return channel

	def _removeMember(self, channel, client):
		channel.removeMember(client)
		if channel.isEmpty():
			self.registry.remove(channel.name)

	def _changeOperator(self, client, channel, args):
		if not channel.hasMember(client):
			raise CommandError(replies.numeric(irc.ERR_NOTONCHANNEL, client, channel.name))
		modes = args[2]
		sign = modes[0] if modes[0] in "+-" else "+"
		chars = modes.lstrip("+-")
		if chars != "o":
			unknown = [c for c in chars if c != "o"]
			raise CommandError(replies.numeric(
				irc.ERR_UNKNOWNMODE, client, unknown[0] if unknown else modes))
		if len(args) < 4:
			raise CommandError(replies.numeric(irc.ERR_NEEDMOREPARAMS, client, "MODE"))
		if not channel.isOperator(client):
			raise CommandError(
				replies.numeric(irc.ERR_CHANOPRIVSNEEDED, client, channel.name))
		target = channel.findMember(args[3])
		if target is None:
			raise CommandError(replies.numeric(
				irc.ERR_USERNOTINCHANNEL, client, args[3], channel.name))
		if (sign == "+") == channel.isOperator(target):
			return [], None
		if sign == "+":
			channel.addOperator(target)
		else:
			channel.removeOperator(target)
		log.msg("{} set {}o on {} in {}".format(client.nickname, sign, target.nickname, channel.name))
		return channel.members(), replies.message(
			client, "MODE", channel.name, sign + "o", target.nickname)

	def _sendNames(self, client, name, names):
		if names is not None:
			client.send(replies.numeric(
				irc.RPL_NAMREPLY, client, "=", name, text=" ".join(names)))
		client.send(replies.numeric(irc.RPL_ENDOFNAMES, client, name))
