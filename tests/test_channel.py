from channel import Channel
from conftest import makeClient


def test_add_member_is_idempotent():
	channel = Channel("#x")
	alice = makeClient("alice")
	channel.addMember(alice)
	channel.addMember(alice)
	assert channel.members() == [alice]
	assert len(channel) == 1


def test_members_keep_join_order():
	channel = Channel("#x")
	clients = [makeClient(n) for n in ("carol", "alice", "bob")]
	for c in clients:
		channel.addMember(c)
	assert channel.members() == clients


def test_members_is_a_snapshot():
	channel = Channel("#x")
	alice, bob = makeClient("alice"), makeClient("bob")
	channel.addMember(alice)
	snapshot = channel.members()
	channel.addMember(bob)
	channel.removeMember(alice)
	assert snapshot == [alice]
	assert channel.members() == [bob]


def test_remove_member_drops_operator_rights():
	channel = Channel("#x")
	alice = makeClient("alice")
	channel.addMember(alice)
	channel.addOperator(alice)
	channel.removeMember(alice)
	assert not channel.hasMember(alice)
	assert not channel.isOperator(alice)
	assert channel.isEmpty()


def test_remove_absent_member_is_noop():
	channel = Channel("#x")
	alice, bob = makeClient("alice"), makeClient("bob")
	channel.addMember(alice)
	channel.removeMember(bob)
	assert channel.members() == [alice]


def test_operator_mutations():
	channel = Channel("#x")
	alice = makeClient("alice")
	channel.addMember(alice)
	assert not channel.isOperator(alice)
	channel.addOperator(alice)
	assert channel.isOperator(alice)
	assert channel.operators() == [alice]
	channel.removeOperator(alice)
	assert not channel.isOperator(alice)
	assert channel.hasMember(alice)


def test_find_member_and_names():
	channel = Channel("#x")
	alice, bob = makeClient("alice"), makeClient("bob")
	channel.addMember(alice)
	channel.addMember(bob)
	channel.addOperator(alice)
	assert channel.findMember("bob") is bob
	assert channel.findMember("BoB") is bob
	assert channel.findMember("carol") is None
	assert channel.names() == ["@alice", "bob"]
