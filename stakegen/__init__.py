# *IMPORTANT*: Don't manually change the version here. Use the 'bump2version' utility.
__version__ = '0.1.0'
