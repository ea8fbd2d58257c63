import sys

from twisted.internet import reactor
from twisted.python import log, usage
from twisted.python.logfile import DailyLogFile

from chat_server import ChatServer


class ServerOptions(usage.Options):

	optParameters = [
		["port", "p", 6667, "Port to listen on.", int],
		["interface", "i", "", "Interface to bind to, all interfaces by default."],
		["servername", "s", "localhost", "Server name used in PONG replies."],
		["userhost", None, "localhost", "Host part of client prefixes."],
		["logfile", "l", None, "Log to this file instead of stdout."],
	]


def main(argv=None):
	options = ServerOptions()
	try:
		options.parseOptions(argv)
	except usage.UsageError as e:
		sys.stderr.write("{}: {}\n{}\n".format(sys.argv[0], e, options))
		return 1

	if options["logfile"]:
		log.startLogging(DailyLogFile.fromFullPath(options["logfile"]))
	else:
		log.startLogging(sys.stdout)

	server = ChatServer(options["servername"], options["userhost"])
	reactor.listenTCP(options["port"], server, interface=options["interface"])
	reactor.run()
	return 0


if __name__ == '__main__':
	sys.exit(main())
