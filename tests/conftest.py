pytest_plugins = ["appexplorer.test_utils.fixtures"]
