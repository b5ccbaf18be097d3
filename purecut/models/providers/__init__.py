"""
Provider clients. Each one turns a ModelRequest into a ModelReply and maps
SDK failures onto ModelError.
"""
