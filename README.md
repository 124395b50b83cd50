# fenris

Building blocks for an encrypted client/server file service. The package
holds the pieces that both sides of such a service share. Every module
reports failure by raising an exception that carries a result code
(`result` attribute) from an enum, together with a `*_to_string` function
that turns that code into a short description.

## Modules

- `fenris.compression`: zlib streams.
  - `compress(data, level)` compresses at level 0 to 9; any other level
    raises `CompressionError` with `CompressionResult.INVALID_LEVEL`.
  - `decompress(data, original_size)` expects the output to fit in
    `original_size` bytes. It raises `CompressionError` with
    `BUFFER_TOO_SMALL` when the stream expands beyond that, and with
    `INVALID_DATA` when the stream is corrupt or truncated.
- `fenris.crypto`: AES-GCM and ECDH on NIST P-256.
  - `encrypt_data(plaintext, key, iv)` / `decrypt_data(ciphertext, key, iv)`
    take a 16, 24 or 32-byte key and a 12-byte IV; the ciphertext ends with
    a 16-byte tag. Failures raise `EncryptionError` (`EncryptionResult`).
  - `generate_ecdh_keypair()` returns a 32-byte private scalar and a 65-byte
    uncompressed public point; `compute_ecdh_shared_secret(private_key,
    peer_public_key)` returns the 32-byte shared secret.
  - `derive_key_from_shared_secret(shared_secret, key_size, context=b"")`
    runs HKDF-SHA256 with the salt `fenris-salt` and the info `AES-Key`
    followed by `context`. Failures raise `ECDHError` (`ECDHResult`).
  - `generate_random_iv()` returns 12 random bytes.
  - Constants: `AES_GCM_TAG_SIZE`, `AES_GCM_IV_SIZE`, `AES_GCM_KEY_SIZE`.
- `fenris.file_operations`: `read_file`, `write_file`, `append_file`,
  `create_file`, `delete_file`, `get_file_info`, `file_exists`,
  `create_directory`, `create_directories`, `delete_directory`,
  `list_directory`, `change_directory`, `get_current_directory`,
  `rename_path`, `copy_file` and `get_file_size`. Failures raise
  `FileOperationError` with a `FileOperationResult` (for instance
  `FILE_NOT_FOUND`, `PERMISSION_DENIED`, `DIRECTORY_NOT_EMPTY`).
  `get_file_info` and `list_directory` return `FileInfo` records with
  `name`, `size`, `is_directory`, `modified_time` and `permissions`.
  `os_error_to_result` maps an `OSError` to a result code.
- `fenris.logsetup`: named loggers built on the `logging` module.
  - `LoggingConfig` chooses a `LogLevel`, console output, and a rotating log
    file (`log_file_path`, `max_file_size`, `max_files`).
  - `initialize_logging(config, logger_name="fenris")` sets up and returns
    the logger; `get_logger(name)` returns a registered logger or the
    `fenris` logger; `set_log_level(level)` changes every registered logger.
  - `configure_logging(args, log_name="fenris")` builds the configuration
    from an object with `log_level`, `no_console_log`, `file_log` and
    `log_file` attributes (such as an `argparse.Namespace`) and raises
    `ValueError` for an unknown level.
- `fenris.network`: framing over stream sockets. `send_prefixed_data` sends
  a 4-byte big-endian length followed by the payload;
  `receive_prefixed_data` reads one such message. The lower-level
  `send_size`, `receive_size`, `send_data` and `receive_data` are available
  too. With `non_blocking_mode=True` a socket that would block is retried
  after `DELAY` milliseconds. Failures raise `NetworkError` (`NetworkResult`),
  e.g. `DISCONNECTED` when the peer closes the connection mid-message.
- `fenris.cache`: `CacheManager(max_cache_size=100, logger_name="CacheManager")`,
  a thread-safe LRU cache of text file contents. `read_file` serves from the
  cache or reads from disk (returning `""` if the file cannot be read),
  `write_file` writes to disk and caches the content, `invalidate` and
  `clear_cache` drop entries, and `len(cache)` counts cached files.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Example: key exchange and an encrypted message

```python
from fenris.crypto import (
    compute_ecdh_shared_secret,
    decrypt_data,
    derive_key_from_shared_secret,
    encrypt_data,
    generate_ecdh_keypair,
    generate_random_iv,
)

a_private, a_public = generate_ecdh_keypair()
b_private, b_public = generate_ecdh_keypair()

shared_key = derive_key_from_shared_secret(
    compute_ecdh_shared_secret(a_private, b_public), 32
)
iv = generate_random_iv()
ciphertext = encrypt_data(b"hello", shared_key, iv)
assert decrypt_data(ciphertext, shared_key, iv) == b"hello"
```

## Example: framed messages over a socket

```python
import socket

from fenris.network import receive_prefixed_data, send_prefixed_data

left, right = socket.socketpair()
send_prefixed_data(left, b"payload")
assert receive_prefixed_data(right) == b"payload"
```

## Example: caching file contents

```python
from fenris.cache import CacheManager

cache = CacheManager(max_cache_size=3)
cache.write_file("/tmp/notes.txt", "first draft")
print(cache.read_file("/tmp/notes.txt"))  # served from the cache
print(len(cache))                          # 1
```

When the cache is full, storing a new file evicts the entry that was used
least recently. Changes made to a cached file on disk by other means are
not seen until the entry is invalidated or evicted.

## What this package does not do

It provides no client, no server and no command-line program. There is no
request/response message format and no handling of file commands sent over
the network: the modules above are the parts such a client and server would
be built from.