[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "feap_ecs"
version = "0.1.0"
description = "Building blocks for scheduling in an entity component system: dependency graphs, DAG analysis, sparse storage, item layouts and schedule node containers."
requires-python = ">=3.10"
dependencies = []
keywords = ["ecs", "entity-component-system", "scheduling", "graph", "dag", "sparse-set"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["feap_ecs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
