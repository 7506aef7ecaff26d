CATEGORY_DESCRIPTION = "Host identification (kernel, release, hostname)."
