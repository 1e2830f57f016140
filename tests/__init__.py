"""
Test suite for the Driving Demo Simulation Core.

This package contains unit tests organized by component:
- test_vehicle_params.py: Tests for VehicleParams, AudioParams and presets
- test_dynamics.py: Tests for the vehicle dynamics integrator
- test_audio_reactor.py: Tests for the audio channel policies
- test_controls.py: Tests for keyboard to input mapping
- test_scenarios.py: Tests for scripted input sequences
- test_simulation.py: Tests for the tick loop and drive traces
- test_drive_analysis.py: Tests for drive analysis
- test_integration.py: Integration tests for preset comparison and the CLI
"""
