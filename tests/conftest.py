import threading

import pytest
from twisted.internet.testing import StringTransport

from client import Client
from dispatcher import CommandDispatcher
from registry import ChannelRegistry


class ListTransport:
	"""Collects written lines; safe to write to from several threads."""

	def __init__(self):
		self.lock = threading.Lock()
		self.written = []

	def write(self, data):
		with self.lock:
			self.written.append(data.decode("utf-8"))


def makeClient(nickname, username="u", registered=True, transport=None):
	client = Client(transport if transport is not None else StringTransport())
	client.nickname = nickname
	client.username = username
	client.registered = registered
	return client


def received(client):
	"""Return and clear the lines written to a StringTransport-backed client."""
	data = client.transport.value().decode("utf-8")
	client.transport.clear()
	return data.splitlines(True)


def assertInvariants(registry):
	with registry.lock:
		for name in registry.names():
			channel = registry.find(name)
			assert not channel.isEmpty(), name
			assert set(channel.operators()) <= set(channel.members()), name


@pytest.fixture
def registry():
	return ChannelRegistry()


@pytest.fixture
def dispatcher(registry):
	return CommandDispatcher(registry)


@pytest.fixture
def alice():
	return makeClient("alice")


@pytest.fixture
def bob():
	return makeClient("bob")
