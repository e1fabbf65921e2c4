# componentbase

Building blocks shared by long-running server components. The package has no
third-party dependencies.

- **Flag values** (`componentbase.flag_values`): `MapStringBool`, `ConfigurationMap`,
  `NamedCertKey`, `NamedCertKeyArray`, `StringFlag`, `StringSlice`, `Tristate` and `NoOp`.
  Each one parses a command-line string with `set()` and renders itself back with `str()`.
  `parse_bool` accepts `1`, `t`, `T`, `true`, `TRUE`, `True` and the matching false
  spellings.
- **Flag name normalization** (`componentbase.normalize`): `word_sep_normalize` and
  `warn_word_sep_normalize` turn `foo_bar` into `foo-bar` (the second logs a warning once
  per name). `normalize_args` applies a normalizer to the long options of an argument list
  before it is parsed, and `log_flags` logs parsed flags as `FLAG: --name="value"` lines.
- **Feature gates** (`componentbase.featuregate`): register features with a maturity
  level, switch them with `"Feature=true,Other=false"`, and ask `enabled()`.
- **Config endpoint** (`componentbase.configz`): register named configuration objects and
  serve them all as one JSON object from a small WSGI app.
- **TLS names** (`componentbase.ciphersuites`): map cipher suite and TLS version names
  to their numeric IDs.
- **Config types** (`componentbase.config`, `componentbase.v1alpha1`): client connection,
  leader election and debugging settings, the recommended defaults, dictionary
  serialisation of the versioned types, and conversion between the versioned and internal
  forms.
- **Validation** (`componentbase.validation`): `FieldError` lists for these configs.
- **Leader election flags** (`componentbase.leader_election_flags`): binds
  `--leader-elect` and the related options to a `LeaderElectionConfiguration` on an
  `argparse` parser; `parse_duration` reads values such as `15s` or `1h30m`.
- **Sectioned help** (`componentbase.sectioned`): `NamedFlagSets` keeps named `argparse`
  parsers in order, and `print_sections` writes each one as a titled section.

## Install

```
pip install .
pip install ".[test]"   # with pytest
```

## Feature gates

```python
from componentbase.featuregate import FeatureGate, FeatureSpec, PreRelease

gate = FeatureGate("my-component")
gate.add({
    "NewScheduler": FeatureSpec(default=False, pre_release=PreRelease.ALPHA),
    "FastPath": FeatureSpec(default=True, pre_release=PreRelease.BETA),
})
gate.set("NewScheduler=true")
assert gate.enabled("NewScheduler")
print(gate)   # NewScheduler=true
```

`AllAlpha=true` and `AllBeta=true` switch every alpha or beta feature that was not set
explicitly. A feature registered with `lock_to_default=True` cannot be changed, and
`override_default()` changes a registered default. Rejected operations raise
`FeatureGateError`; asking about a feature that was never registered raises
`UnregisteredFeatureError`. `add_flag(parser)` adds a `--feature-gates` option to an
`argparse` parser, after which no features may be added and no defaults overridden.
`deep_copy()` returns an independent gate for trying out changes.

## Flag values

```python
from componentbase.flag_values import MapStringBool, NamedCertKey

target = {}
flags = MapStringBool(target)
flags.set("a=true, b=false")
assert target == {"a": True, "b": False}

cert = NamedCertKey()
cert.set("tls.crt,tls.key:example.com,www.example.com")
print(cert)   # tls.crt,tls.key:example.com,www.example.com
```

Parse errors raise `FlagValueError`.

## Serving configuration

```python
from wsgiref.simple_server import make_server
from componentbase import configz

cfg = configz.new("scheduler")
cfg.set({"qps": 50})
make_server("localhost", 8080, configz.configz_app).serve_forever()
```

`configz_app` answers every request it receives with the JSON of all registered
configurations; mount it at the path you want (for example `/configz`) with your own
router. Registering a name twice raises `RegistrationError`. Dataclasses, enums and
objects with a `to_dict()` method are serialised as well as plain JSON values.

## Validation

```python
from componentbase.config import ClientConnectionConfiguration
from componentbase.validation import validate_client_connection_configuration

errors = validate_client_connection_configuration(
    ClientConnectionConfiguration(burst=-1), "clientConnection"
)
for error in errors:
    print(error)   # clientConnection.burst: Invalid value: -1: must be non-negative
```

## What this package does not do

- It has no command runner and no command-line program of its own; you build parsers
  with `argparse` and use these pieces in them.
- It does not configure logging; it only logs warnings through the standard `logging`
  module.
- Feature gates do not publish metrics.
- There is no scheme or codec machinery: versioned types convert to and from plain
  dictionaries and the internal types only through the functions in
  `componentbase.v1alpha1`.

## Tests

```
pytest
```