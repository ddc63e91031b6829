from pipegen.adapters.vcs.git import GitRemoteService

__all__ = ["GitRemoteService"]
