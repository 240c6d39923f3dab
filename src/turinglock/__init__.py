"""turinglock: a two-register virtual machine."""
