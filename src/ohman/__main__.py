from ohman.cli import main

raise SystemExit(main())
