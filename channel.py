class Channel:

	def __init__(self, name):
		self.name = name
		self._members = {} # insertion ordered, gives broadcasts a stable order
		self._operators = set()

	def hasMember(self, client):
		return client in self._members

	def addMember(self, client):
		self._members.setdefault(client, None)

	def removeMember(self, client):
		self._members.pop(client, None)
		self._operators.discard(client)

	def isOperator(self, client):
		return client in self._operators

	def addOperator(self, client):
		self._operators.add(client)

	def removeOperator(self, client):
		self._operators.discard(client)

	def members(self):
		return list(self._members)

	def operators(self):
		return [member for member in self._members if member in self._operators]

	def findMember(self, nickname):
		nickname = nickname.lower()
		for member in self._members:
			if member.nickname.lower() == nickname:
				return member
		return None

	def names(self):
		return [("@" if member in self._operators else "") + member.nickname
			for member in self._members]

	def isEmpty(self):
		return not self._members

	def __len__(self):
		return len(self._members)

	def __repr__(self):
		return "Channel({}, {} members)".format(self.name, len(self._members))
