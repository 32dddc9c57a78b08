from datetime import timedelta

import pytest

from orcawal.client import Instance, InstanceStatus
from orcawal.faults import (
    CrashRecoveryAction,
    CrashRecoveryFaults,
    CrashRecoverySchedule,
    PermanentFaults,
)

INTERVAL = timedelta(seconds=60)


def instance_for_test(identifier):
    return Instance(
        id=identifier, region="", main_ip="127.0.0.1", status=InstanceStatus.ACTIVE
    )


def instances(count):
    return [instance_for_test(str(i)) for i in range(count)]


def lengths(action):
    return len(action.boot), len(action.kill)


def test_crash_recovery_1_fault():
    schedule = CrashRecoverySchedule(CrashRecoveryFaults(1, INTERVAL), instances(1))
    assert lengths(schedule.update()) == (0, 1)
    assert lengths(schedule.update()) == (1, 0)
    assert lengths(schedule.update()) == (0, 1)
    assert lengths(schedule.update()) == (1, 0)


def test_crash_recovery_2_faults():
    schedule = CrashRecoverySchedule(CrashRecoveryFaults(2, INTERVAL), instances(2))
    assert lengths(schedule.update()) == (0, 2)
    assert lengths(schedule.update()) == (2, 0)
    assert lengths(schedule.update()) == (0, 2)
    assert lengths(schedule.update()) == (2, 0)


@pytest.mark.parametrize("max_faults", range(3, 33))
def test_crash_recovery(max_faults):
    min_faults = max_faults // 3
    schedule = CrashRecoverySchedule(
        CrashRecoveryFaults(max_faults, INTERVAL), instances(max_faults)
    )
    assert lengths(schedule.update()) == (0, min_faults)
    assert lengths(schedule.update()) == (0, min_faults)
    assert lengths(schedule.update()) == (0, max_faults - 2 * min_faults)
    assert lengths(schedule.update()) == (max_faults, 0)
    assert lengths(schedule.update()) == (0, min_faults)


def test_crash_recovery_kills_distinct_instances():
    pool = instances(9)
    schedule = CrashRecoverySchedule(CrashRecoveryFaults(9, INTERVAL), pool)
    killed = []
    for _ in range(3):
        killed.extend(schedule.update().kill)
    assert killed == pool
    assert schedule.update().boot == pool


def test_permanent_kills_once():
    pool = instances(4)
    schedule = CrashRecoverySchedule(PermanentFaults(2), pool)
    first = schedule.update()
    assert first.kill == pool[:2]
    assert first.boot == []
    assert lengths(schedule.update()) == (0, 0)


def test_permanent_zero_faults_never_kills():
    schedule = CrashRecoverySchedule(PermanentFaults(), instances(3))
    assert lengths(schedule.update()) == (0, 0)
    assert lengths(schedule.update()) == (0, 0)


def test_too_few_instances_rejected():
    schedule = CrashRecoverySchedule(PermanentFaults(3), instances(1))
    with pytest.raises(ValueError):
        schedule.update()


def test_crash_intervals():
    assert PermanentFaults(3).crash_interval() == timedelta(seconds=1)
    assert CrashRecoveryFaults(2, INTERVAL).crash_interval() == INTERVAL


def test_labels_and_display():
    assert PermanentFaults(0).label() == "0"
    assert str(PermanentFaults(0)) == "no faults"
    assert str(PermanentFaults(3)) == "3 crashed"
    assert CrashRecoveryFaults(1, INTERVAL).label() == "1-60cr"
    assert str(CrashRecoveryFaults(1, INTERVAL)) == "1 crash-recovery, 60s"


def test_action_display():
    pool = instances(3)
    assert str(CrashRecoveryAction.killing(pool[:2])) == "2 node(s) killed"
    assert str(CrashRecoveryAction.booting(pool)) == "3 node(s) recovered"
    assert str(CrashRecoveryAction(boot=pool[:1], kill=pool[1:])) == (
        "2 node(s) killed and 1 node(s) recovered"
    )
    assert str(CrashRecoveryAction.no_op()) == "0 node(s) killed"


def test_action_constructors_take_iterators():
    pool = instances(2)
    action = CrashRecoveryAction.booting(iter(pool))
    assert action.boot == pool
    assert action.kill == []