"""Seattle Guide — chat assistant for visiting Seattle, backed by maps and corpus tools."""
