__title__ = "versioneye"
__description__ = "Typed client for the VersionEye REST API."
__version__ = "0.1.0"
