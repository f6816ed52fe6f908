"""Transaction types and a bounded pool with pluggable fee and priority policies."""