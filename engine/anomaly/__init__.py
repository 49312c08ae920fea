"""
Anomaly detection for term count series using trailing rolling-window statistics, flagging spikes and drops that leave the expected band around the rolling mean.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.anomaly.rolling import AnomalyRecord, AnomalyReport, detect, window_size

__all__ = ["AnomalyRecord", "AnomalyReport", "detect", "window_size"]
