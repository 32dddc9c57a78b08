# orcawal

Building blocks for running and measuring a DAG-based consensus testbed:

- `orcawal.types` — `BlockReference` (ordered by round, then author, then
  digest), the bit-mask `AuthoritySet` for authorities below 128, and
  `format_authority_index` / `format_authority_round`, which render
  authorities as letters (`0` is `A`, so authority 1 at round 3 is `B3`).
- `orcawal.transactions` — `Transaction`, `TransactionLocator`,
  `TransactionLocatorRange` (with `one`, `range`, `locators` and `verify`),
  and `extract_timestamp`, which reads the little-endian millisecond
  timestamp from the first 8 bytes of a transaction.
- `orcawal.stat` — `PreciseHistogram`, an exact histogram with averages and
  per-mille percentiles, fed directly or through a `HistogramSender`.
- `orcawal.faults` — `PermanentFaults` and `CrashRecoveryFaults`, and a
  `CrashRecoverySchedule` that decides which instances to kill or boot at
  each step.
- `orcawal.client` — `Instance`, `InstanceStatus` and the abstract
  `ServerProviderClient` interface.
- `orcawal.logs` — `LogsAnalyzer`, which counts `" ERROR"` lines and spots
  panics in node and client logs.
- `orcawal.display` — console output helpers (`header`, `error`, `warn`,
  `config`, `action`, `status`, `done`, `newline`), each writing to
  standard output or to a given stream.
- `orcawal.errors` — the error hierarchy rooted at `TestbedError`.

No third-party packages are required.

## Installation

```
pip install .
```

With test dependencies:

```
pip install ".[test]"
```

## Histograms

```python
from orcawal.stat import histogram

hist, sender = histogram(0)
for value in (10, 20, 30, 40):
    sender.observe(value)
hist.receive_all()
print(hist.avg())             # 25
print(hist.pct(500))          # 30
print(hist.pcts([500, 900]))  # (30, 40)
```

`clear()` drops the stored points but keeps `total_sum()` and
`total_count()`. Percentile ranks outside `[0, 1000)` raise `ValueError`.

## Block references and authority sets

```python
from orcawal.types import AuthoritySet, BlockReference

print(BlockReference(authority=1, round=3))  # B3

authorities = AuthoritySet()
authorities.insert(2)
authorities.insert(0)
print(list(authorities.present()))  # [0, 2]
```

## Fault schedules

```python
from datetime import timedelta
from orcawal.client import Instance
from orcawal.faults import CrashRecoveryFaults, CrashRecoverySchedule

instances = [Instance(id=str(i), region="local", main_ip="127.0.0.1") for i in range(3)]
schedule = CrashRecoverySchedule(
    CrashRecoveryFaults(max_faults=3, interval=timedelta(seconds=60)),
    instances,
)
print(schedule.update())  # 1 node(s) killed
```

## Log analysis

```python
from orcawal.logs import LogsAnalyzer

analyzer = LogsAnalyzer()
analyzer.set_node_errors("2024 ERROR disk full\n2024 ERROR retry\n")
analyzer.print_summary()  # prints "Logs contain errors (node: 2, client: 0)"
```

## What this package does not do

- It has no persistent storage: there is no write-ahead log or block store.
- It ships no concrete cloud provider; `ServerProviderClient` is an
  abstract interface for you to implement.
- It has no command-line program and runs no validator nodes.

## Tests

```
pytest
```