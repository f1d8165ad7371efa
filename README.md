# m2ebridge

`m2ebridge` holds the building blocks of a message bridge: a message type
that converts between raw text, JSON and CBOR, a set of filter stages
("filtras") that test, reshape, split and route messages, a store for the
bridge's JSON configuration and pipeline definitions, and a ZeroMQ reply
socket for local control requests.

Install with the test extra to run the tests:

```
pip install .[test]
pytest
```

## Messages

`m2ebridge.message`:

- `MessageFormat`: `UNKN`, `RAW`, `JSON`, `CBOR`.
- `Message(data, topic, fmt)`. Without `fmt`, `data` is taken as already
  serialized; with `fmt`, `data` is a decoded value encoded on demand.
  `Message()` with no data is invalid and false.
  - `raw`: the serialized payload. A decoded value is encoded as compact
    JSON (`str`) or CBOR (`bytes`); any other format raises `RuntimeError`.
  - `json`: the decoded payload; serialized data is parsed as JSON and the
    message then counts as JSON. It can be assigned.
  - `topic`, `format`, and `topic_level(level)`, which returns one
    `/`-separated topic level or `""` past the last one.
- `MessageWrapper(msg)` keeps a copy of the original (`orig`) next to the
  working copy (`msg`), a `passed` flag (`mark_passed`, `reject`,
  `pass_if`), a set of `destinations` (`add_destination`,
  `add_destinations`, `clear_destinations`) and `metadata`, into which
  `add_metadata` merges objects as a JSON merge patch.

```python
from m2ebridge.message import Message, MessageFormat, MessageWrapper

msg = Message({"temp": 50}, "/site/sensor", MessageFormat.JSON)
print(msg.raw)             # {"temp":50}
print(msg.topic_level(1))  # site
```

## Filtras

Every filtra in `m2ebridge.filtras` derives from `Filtra`
(`m2ebridge.filtras.filtra`) and is built from a pipeline object that
implements `PipelineIface.schedule_event(msec)` and a dict description.
`process(msg_w)` merges the filtra's `metadata` into the message and calls
`process_message(msg_w)`, which returns a hop override or `""`.
`generate()` returns a message produced by the filtra itself (an invalid
`Message` unless the filtra makes one).

Common description keys:

| key                | meaning                                   | default |
|--------------------|-------------------------------------------|---------|
| `name`             | display name                              | `""`    |
| `msg_format`       | `"json"` or `"raw"`                       | `"raw"` |
| `logical_negation` | invert the result of the test             | `false` |
| `queues`           | destination queue ids (`destinations`)    | none    |
| `metadata`         | object merged into the message metadata   | none    |
| `goto`             | next hop for both outcomes                | `""`    |
| `goto_passed`      | next hop when the message passes          | `goto`  |
| `goto_rejected`    | next hop when the message is rejected     | `goto`  |

The hops are available as the `hops` tuple `(passed, rejected)`.

Types:

- `builder.BuilderFT`: sets the JSON payload to `payload`; raises
  `RuntimeError` unless `msg_format` is `"json"`.
- `comparator.ComparatorFT`: compares the number under `value_key` with
  `comparand` using `operator` (`eq`, `gt`, `gte`, `lt`, `lte`, see
  `ComparatorOperator`); a missing or non-numeric value raises `ValueError`.
- `eraser.EraserFT`: removes the listed `keys` from a JSON object payload.
- `finder.FinderFT`: with `string`, checks the raw message, or the string
  under `value_key`, with `operator` (`contain`, `contained`, `match`;
  default `match`, see `SearchOperator`); with `keys`, requires every key
  in the JSON payload. Also offers `find_in_string`, `find_in_keys` and
  `find_in_value`.
- `limiter.LimiterFT`: passes messages of at most `size` bytes.
- `nop.NopFT`: passes every message.
- `splitter.SplitterFT`: for a message longer than `chunk_size` bytes,
  `process_message` returns `"self"` and each following
  `generate_message()` call returns one CBOR chunk
  `["____SPL", message_id, total_size, chunk_index, bytes]`, then an
  invalid message when all chunks are out.
- `throttle.ThrottleFT`: passes at most `rate` messages per second.

```python
from m2ebridge.filtras.comparator import ComparatorFT

ft = ComparatorFT(pipeline, {
    "operator": "gte", "value_key": "temp", "comparand": 45,
    "goto_passed": "cooler_on", "goto_rejected": "cooler_off",
})
```

`m2ebridge.schema.get_schemas()` returns the description schemas, grouped
under `"connectors"` and `"filtras"`; `get_schema_by_type(type_name)`
returns one and raises `RuntimeError("Unknown type")` for an unknown name.

## Configuration

`m2ebridge.config.GlobalConfig`:

- `load(config_path)` reads the main JSON file and the pipelines file named
  by its `pipelines_path`; a file that cannot be opened raises
  `RuntimeError`.
- `jwt_public_key_path`, `authbundles_db_path`, `pipelines` and
  `api_authentication` (default `True`).
- `set_api_authentication(value)`, `save_config()` and `save_pipelines()`
  write the files back with 4-space indentation and return whether the
  write succeeded.
- `add_pipeline(pipeid, pipeline_data)` raises `ValueError` for an existing
  id; `update_pipeline` and `delete_pipeline` raise `ValueError` for a
  missing one.

## Queues

`m2ebridge.queues`:

- `BoundedQueue(size_limit=100)`: `push` drops the item and returns
  `False` once the queue is full; `pop` returns the oldest item or `None`;
  `wait(timeout)` blocks until notified; `exit_blocking_calls` wakes one
  waiter; `len()` gives the size.
- `ThreadSafeQueue`: `enqueue`, a blocking `dequeue`, and `empty`.

## Control socket

`m2ebridge.zmq_listener.ZmqListener(config, endpoint)` serves a ZeroMQ REP
socket (default `ipc:///tmp/m2eb-zmq.sock`) on a background thread between
`start()` and `stop()`. `ZmqListener.get_instance(config)` returns one
shared listener. Requests are mapped with `zmq_request_from_string`:

| request            | reply                                              |
|--------------------|----------------------------------------------------|
| `api_version`      | the installed package version                      |
| `status`           | `running`                                          |
| `set_api_auth_on`  | `ok` or `fail`, after saving the config            |
| `set_api_auth_off` | `ok` or `fail`, after saving the config            |
| anything else      | `Hello from m2e-bridge`                            |

Without a `GlobalConfig`, the two authentication requests reply `fail`.

## Errors

`m2ebridge.exceptions` defines `DuplicateError`, `MissingDependency`,
`IncompatibleDependency` (all `RuntimeError`) and `ConfigurationError`
(`ValueError`).

## What the package does not do

- It has no connectors: nothing here receives from or sends to a broker,
  cloud service, mail server or HTTP endpoint, and the `"connectors"`
  schema group is empty.
- It has no pipeline runner or factory: filtras are created and called
  directly, and nothing moves messages from one stage to the next.
- It has no command-line program and no HTTP API; the only server is the
  control socket above.
- It keeps no registry of callbacks to run at shutdown.