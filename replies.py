from twisted.words.protocols import irc

CRLF = "\r\n"

TEXTS = {
	irc.RPL_ENDOFNAMES: "End of /NAMES list",
	irc.ERR_NOSUCHNICK: "No such nick/channel",
	irc.ERR_NOSUCHCHANNEL: "No such channel",
	irc.ERR_UNKNOWNCOMMAND: "Unknown command",
	irc.ERR_NONICKNAMEGIVEN: "No nickname given",
	irc.ERR_ERRONEUSNICKNAME: "Erroneous nickname",
	irc.ERR_NICKNAMEINUSE: "Nickname is already in use",
	irc.ERR_USERNOTINCHANNEL: "They aren't on that channel",
	irc.ERR_NOTONCHANNEL: "You're not on that channel",
	irc.ERR_NOTREGISTERED: "You have not registered",
	irc.ERR_NEEDMOREPARAMS: "Not enough parameters",
	irc.ERR_ALREADYREGISTRED: "You may not reregister",
	irc.ERR_UNKNOWNMODE: "is unknown mode char to me",
	irc.ERR_BADCHANMASK: "Bad Channel Mask",
	irc.ERR_CHANOPRIVSNEEDED: "You're not channel operator",
}


def numeric(code, client, *params, text=None):
	"""
	Build a numeric reply addressed to C{client}, e.g.
	C{442 alice #x :You're not on that channel\\r\\n}.
	"""
	if text is None:
		text = TEXTS[code]
	parts = [code, client.nickname or "*"]
	parts.extend(params)
	return "{} :{}{}".format(" ".join(parts), text, CRLF)


def message(source, command, *params, trailing=None):
	"""Build a line relayed from C{source}: C{:nick!user@host COMMAND params[ :trailing]}."""
	line = ":{} {}".format(source.prefix(), command)
	if params:
		line += " " + " ".join(params)
	if trailing:
		line += " :" + trailing
	return line + CRLF


def trailingText(args, start):
	"""Rejoin free text split by the tokenizer, dropping the C{:} that marks it."""
	text = " ".join(args[start:])
	if text.startswith(":"):
		text = text[1:]
	return text
