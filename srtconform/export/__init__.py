from .srt_exporter import export_srt

__all__ = ["export_srt"]
