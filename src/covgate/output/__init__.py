from covgate.output.summary import render_gate_summary

__all__ = ["render_gate_summary"]
