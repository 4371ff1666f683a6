from webappfetch.runner.runner import Runner

__all__ = ['Runner']
