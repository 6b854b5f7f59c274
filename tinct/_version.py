# Tinct project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

__version__ = version = "0.4.0"
__version_tuple__ = version_tuple = (0, 4, 0)
