"""Task list persistence: the storage interface, a JSON file back end and an in-memory one."""