from twisted.python import log


class Client:

	def __init__(self, transport, host="localhost"):
		self.transport = transport
		self.host = host
		self.nickname = None
		self.username = None
		self.registered = False

	def isRegistered(self):
		return self.registered

	def prefix(self):
		return "{}!{}@{}".format(self.nickname, self.username, self.host)

	def send(self, line):
		# fire-and-forget
		try:
			self.transport.write(line.encode("utf-8"))
		except Exception:
			log.err(None, "Error sending to {}".format(self.nickname))

	def __repr__(self):
		return "Client({})".format(self.nickname or "unregistered")
