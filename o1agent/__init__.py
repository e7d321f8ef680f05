"""O1 management agent: alarms, cell state, YANG data trees and configuration callbacks."""

__version__ = "0.1.0"