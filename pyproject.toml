[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "frrmad"
version = "0.1.0"
description = "Collect and parse OSPF, interface, routing and configuration data from FRRouting daemons"
requires-python = ">=3.10"
keywords = ["frr", "frrouting", "ospf", "routing", "monitoring", "vtysh", "lsa"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Telecommunications Industry",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]
dependencies = [
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["frrmad"]

[tool.pytest.ini_options]
addopts = "-ra"
