[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fenris"
version = "0.1.0"
description = "Shared building blocks for an encrypted remote file service: zlib compression, AES-GCM and ECDH crypto, file operations, logging setup, length-prefixed socket framing and an LRU file cache."
requires-python = ">=3.10"
keywords = ["file server", "aes-gcm", "ecdh", "hkdf", "lru cache", "sockets", "framing"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: File Transfer Protocol (FTP)",
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["fenris"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
