from primequery.cli import main

raise SystemExit(main())
