import asyncio
import ipaddress

import pytest

from orcawal.client import Instance, InstanceStatus, ServerProviderClient


def make_instance(identifier, status=InstanceStatus.ACTIVE, ip="127.0.0.1"):
    return Instance(id=identifier, region="", main_ip=ip, status=status)


class MemoryClient(ServerProviderClient):
    USERNAME = "root"

    def __init__(self, specs):
        self.specs = specs
        self.instances = []

    async def list_instances(self):
        return list(self.instances)

    async def _set_status(self, instances, status):
        ids = {i.id for i in instances}
        self.instances = [
            Instance(i.id, i.region, i.main_ip, i.tags, i.specs, status)
            if i.id in ids
            else i
            for i in self.instances
        ]

    async def start_instances(self, instances):
        await self._set_status(instances, InstanceStatus.ACTIVE)

    async def stop_instances(self, instances):
        await self._set_status(instances, InstanceStatus.INACTIVE)

    async def create_instance(self, region):
        ident = len(self.instances)
        instance = Instance(str(ident), region, f"0.0.0.{ident}", (), self.specs)
        self.instances.append(instance)
        return instance

    async def delete_instance(self, instance):
        self.instances = [i for i in self.instances if i.id != instance.id]

    async def register_ssh_public_key(self, public_key):
        return None

    async def instance_setup_commands(self):
        return []


@pytest.mark.parametrize(
    "text, expected",
    [
        ("running", InstanceStatus.ACTIVE),
        ("RUNNING", InstanceStatus.ACTIVE),
        ("terminated", InstanceStatus.TERMINATED),
        ("Terminated", InstanceStatus.TERMINATED),
        ("stopped", InstanceStatus.INACTIVE),
        ("", InstanceStatus.INACTIVE),
    ],
)
def test_status_from_str(text, expected):
    assert InstanceStatus.from_str(text) is expected


def test_status_string_is_converted():
    instance = make_instance("a", status="running")
    assert instance.status is InstanceStatus.ACTIVE


def test_ip_string_is_converted():
    instance = make_instance("a", ip="10.1.2.3")
    assert instance.main_ip == ipaddress.IPv4Address("10.1.2.3")


def test_invalid_ip_rejected():
    with pytest.raises(ValueError):
        make_instance("a", ip="not-an-ip")


@pytest.mark.parametrize(
    "status, active, inactive, terminated",
    [
        (InstanceStatus.ACTIVE, True, False, False),
        (InstanceStatus.INACTIVE, False, True, False),
        (InstanceStatus.TERMINATED, False, True, True),
    ],
)
def test_status_predicates(status, active, inactive, terminated):
    instance = make_instance("a", status=status)
    assert instance.is_active() is active
    assert instance.is_inactive() is inactive
    assert instance.is_terminated() is terminated


def test_ssh_address_uses_port_22():
    instance = make_instance("a", ip="10.1.2.3")
    assert instance.ssh_address() == ("10.1.2.3", 22)


def test_instances_are_hashable_and_comparable():
    first = make_instance("a")
    second = make_instance("a")
    third = make_instance("b")
    assert first == second
    assert len({first, second, third}) == 2


def test_tags_list_becomes_tuple():
    instance = Instance("a", "r", "127.0.0.1", ["x", "y"])
    assert instance.tags == ("x", "y")


def test_abstract_client_cannot_be_instantiated():
    with pytest.raises(TypeError):
        ServerProviderClient()


def test_incomplete_client_cannot_be_instantiated():
    class Partial(ServerProviderClient):
        USERNAME = "root"

        async def list_instances(self):
            return []

    with pytest.raises(TypeError) as excinfo:
        Partial()
    assert "create_instance" in str(excinfo.value)

    complete = MemoryClient("small")
    created = asyncio.run(complete.create_instance("region-a"))
    assert created == Instance("0", "region-a", "0.0.0.0", (), "small")
    assert created.ssh_address() == ("0.0.0.0", 22)


def test_memory_client_lifecycle():
    async def scenario():
        client = MemoryClient("small")
        created = await client.create_instance("region-a")
        await client.create_instance("region-b")
        await client.stop_instances([created])
        listed = await client.list_instances()
        await client.delete_instance(created)
        remaining = await client.list_instances()
        return created, listed, remaining

    created, listed, remaining = asyncio.run(scenario())
    assert created == Instance("0", "region-a", "0.0.0.0", (), "small")
    assert listed[0] == Instance(
        "0", "region-a", "0.0.0.0", (), "small", InstanceStatus.INACTIVE
    )
    assert [i.is_inactive() for i in listed] == [True, False]
    assert remaining == [Instance("1", "region-b", "0.0.0.1", (), "small")]