pytest_plugins = ["pytester", "partialmock.pytest_plugin"]
