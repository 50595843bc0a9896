"""Game Boy Advance ROM asset tooling built around the BIOS LZ77 codec."""
